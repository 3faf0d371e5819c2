"""Response envelope shared by every validator."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from forge_validators import __version__

logger = logging.getLogger(__name__)


class RequestValidationError(ValueError):
    """Malformed or incomplete validator request."""


@dataclass(frozen=True)
class ValidatorResponse:
    """`success` must be checked before reading `results`."""

    validator: str
    success: bool
    results: Mapping[str, Any] | None = None
    error: str | None = None
    version: str = __version__

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "validator": self.validator,
            "version": self.version,
            "success": self.success,
            "results": _json_safe(self.results),
        }
        if self.error is not None:
            out["error"] = self.error
        return out


def _json_safe(obj: Any) -> Any:
    """Replace non-finite floats by None so the payload is strict JSON."""
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    if isinstance(obj, Mapping):
        return {str(k): _json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_json_safe(v) for v in obj]
    return obj


def require_mapping(params: Any, what: str = "request") -> Mapping[str, Any]:
    if not isinstance(params, Mapping):
        raise RequestValidationError(f"{what} must be a JSON object")
    return params


def coerce_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise RequestValidationError(f"{field!r} must be a number, got {value!r}")
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise RequestValidationError(f"{field!r} must be a number, got {value!r}") from exc
    if not math.isfinite(out):
        raise RequestValidationError(f"{field!r} must be finite, got {value!r}")
    return out


def run_validator(
    validator: str,
    compute: Callable[[], Mapping[str, Any]],
) -> ValidatorResponse:
    """Run `compute` and wrap its outcome; errors become `success=False`.

    Only request and numerical errors (`ValueError`, `TypeError`) are turned
    into failure envelopes; anything else propagates.
    """
    try:
        results = compute()
    except (ValueError, TypeError) as exc:
        logger.error("%s failed: %s", validator, exc)
        return ValidatorResponse(validator=validator, success=False, error=str(exc))
    return ValidatorResponse(validator=validator, success=True, results=results)
