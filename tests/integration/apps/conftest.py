from __future__ import annotations

import json
import logging
from typing import Any

import pytest


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def parse_printed_json():
    def _parse(text: str) -> dict[str, Any]:
        return json.loads(text)

    return _parse


@pytest.fixture
def run_help(capsys):
    def _run(mod, expected: str) -> None:
        with pytest.raises(SystemExit) as exc:
            mod.main(["--help"])
        assert exc.value.code == 0
        out = capsys.readouterr().out
        assert expected in out

    return _run


@pytest.fixture
def run_print_config(capsys, parse_printed_json):
    def _run(mod, *args: str) -> dict[str, Any]:
        code = mod.main([*args, "--print-config"])
        assert code == 0
        return parse_printed_json(capsys.readouterr().out)

    return _run


@pytest.fixture
def run_app(capsys, parse_printed_json):
    def _run(mod, *args: str) -> tuple[int, dict[str, Any]]:
        code = mod.main(list(args))
        return code, parse_printed_json(capsys.readouterr().out)

    return _run
