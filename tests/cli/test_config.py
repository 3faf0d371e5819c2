from __future__ import annotations

import argparse
import importlib
import json
from pathlib import Path

import pytest


def test_load_yaml_config_none_returns_empty() -> None:
    mod = importlib.import_module("forge_validators.cli.config")
    assert mod.load_yaml_config(None) == {}


def test_load_yaml_config_missing_file_raises(tmp_path: Path) -> None:
    mod = importlib.import_module("forge_validators.cli.config")
    missing = tmp_path / "missing.yml"
    with pytest.raises(FileNotFoundError):
        mod.load_yaml_config(missing)


def test_load_yaml_config_non_mapping_raises(write_yaml) -> None:
    mod = importlib.import_module("forge_validators.cli.config")
    path = write_yaml("bad.yml", ["a", "b"])
    with pytest.raises(ValueError, match="YAML mapping"):
        mod.load_yaml_config(path)


def test_load_yaml_config_reads_mapping(write_yaml) -> None:
    mod = importlib.import_module("forge_validators.cli.config")
    path = write_yaml("ok.yml", {"decision_tree": {"tolerance": 0.01}})
    assert mod.load_yaml_config(path) == {"decision_tree": {"tolerance": 0.01}}


def test_deep_merge_merges_nested_and_overrides() -> None:
    mod = importlib.import_module("forge_validators.cli.config")
    base = {"a": 1, "b": {"c": 1, "d": 2}, "e": [1, 2]}
    updates = {"b": {"c": 99}, "e": [3], "f": 5}
    merged = mod.deep_merge(base, updates)
    assert merged == {"a": 1, "b": {"c": 99, "d": 2}, "e": [3], "f": 5}
    assert base["b"] == {"c": 1, "d": 2}


def test_build_config_precedence_defaults_yaml_overrides(write_yaml) -> None:
    mod = importlib.import_module("forge_validators.cli.config")
    defaults = {"real_options": {"defaults": {"r": 0.05, "n": 100}}, "logging": {"level": "WARNING"}}
    yaml_path = write_yaml("cfg.yml", {"real_options": {"defaults": {"n": 250}}})
    overrides = {"logging": {"level": "DEBUG"}}
    config = mod.build_config(defaults, yaml_path, overrides)
    assert config == {
        "real_options": {"defaults": {"r": 0.05, "n": 250}},
        "logging": {"level": "DEBUG"},
    }


def test_resolve_path_expands_home_and_env(monkeypatch, tmp_path: Path) -> None:
    mod = importlib.import_module("forge_validators.cli.config")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("REQUESTS_ROOT", str(tmp_path / "requests"))

    assert mod.resolve_path("~/req.json") == tmp_path / "req.json"
    assert mod.resolve_path("$REQUESTS_ROOT/tree.json") == tmp_path / "requests" / "tree.json"
    assert mod.resolve_path(None) is None


def test_load_request_params_inline_and_file(write_request) -> None:
    mod = importlib.import_module("forge_validators.cli.config")
    path = write_request({"S": 100, "K": 95})

    assert mod.load_request_params('{"S": 1}', None) == {"S": 1}
    assert mod.load_request_params(None, path) == {"S": 100, "K": 95}
    with pytest.raises(ValueError, match="required"):
        mod.load_request_params(None, None)
    with pytest.raises(json.JSONDecodeError):
        mod.load_request_params("{not json", None)


def test_params_args_are_mutually_exclusive() -> None:
    mod = importlib.import_module("forge_validators.cli.config")
    parser = argparse.ArgumentParser()
    mod.add_params_args(parser)

    args = parser.parse_args(["--json", "{}"])
    assert args.params_json == "{}" and args.params_file is None
    with pytest.raises(SystemExit):
        parser.parse_args(["--json", "{}", "--params-file", "x.json"])
