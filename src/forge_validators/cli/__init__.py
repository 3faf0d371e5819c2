from .config import (
    add_config_arg,
    add_params_args,
    build_config,
    deep_merge,
    load_request_params,
    load_yaml_config,
    resolve_path,
)
from .logging import (
    DEFAULT_LOGGING,
    add_logging_args,
    logging_overrides_from_args,
    setup_logging_from_config,
)

__all__ = [
    "DEFAULT_LOGGING",
    "add_config_arg",
    "add_logging_args",
    "add_params_args",
    "build_config",
    "deep_merge",
    "load_request_params",
    "load_yaml_config",
    "logging_overrides_from_args",
    "resolve_path",
    "setup_logging_from_config",
]
