"""
Tests for config_mapper.cli
---------------------------
Coverage:
- Command: check.
- Command: doc.
- Command: dump.
- Schema resolution errors.
- Unreadable config files reported without a traceback.
"""

import json

import pytest

from config_mapper.cli import cmd_check, cmd_doc, cmd_dump, main, resolve_schema
from tests.utils import AppConfig

SCHEMA = "tests.utils:AppConfig"


def test_resolve_schema():
    assert resolve_schema(SCHEMA) is AppConfig


@pytest.mark.parametrize("target", ["tests.utils", "tests.utils:Position", ":AppConfig"])
def test_resolve_schema_rejects(target):
    with pytest.raises((ValueError, TypeError)):
        resolve_schema(target)


def test_check_cmd_valid(app_yaml, capsys):
    assert cmd_check(SCHEMA, str(app_yaml)) == 0
    assert json.loads(capsys.readouterr().out) == {}


def test_check_cmd_reports_errors(write_config, capsys):
    p = write_config("bad.yaml", "position:\n  x: one\n")
    assert cmd_check(SCHEMA, str(p)) == 1

    out = json.loads(capsys.readouterr().out)
    assert out[".position.x"].startswith("InvalidValue: ")
    assert out[".name"] == "NoValueProvided: no value provided"


def test_doc_cmd(capsys):
    assert cmd_doc(SCHEMA) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc == AppConfig.config_doc()


def test_dump_cmd(app_yaml, capsys):
    assert cmd_dump(SCHEMA, str(app_yaml)) == 0
    dumped = json.loads(capsys.readouterr().out)
    assert dumped["services"]["db"] == {"image": "postgres", "port": 80}


def test_dump_cmd_fails_on_errors(write_config, capsys):
    p = write_config("bad.yaml", "{}\n")
    assert cmd_dump(SCHEMA, str(p)) == 1
    assert ".name" in json.loads(capsys.readouterr().out)


def test_main_dispatches(app_yaml, capsys):
    argv = ["--log-level", "ERROR", "check", "--schema", SCHEMA, "--config", str(app_yaml)]
    assert main(argv) == 0
    assert capsys.readouterr().out.strip() == "{}"


def test_check_cmd_reports_missing_file(tmp_path, capsys):
    assert cmd_check(SCHEMA, str(tmp_path / "missing.yaml")) == 1
    assert "Config file not found" in capsys.readouterr().err


@pytest.mark.parametrize(
    "name, text",
    [
        ("app.toml", "name = 'x'\n"),
        ("scalar.yaml", "42\n"),
        ("broken.yaml", "a: [1\n"),
    ],
)
def test_dump_cmd_reports_unreadable_config(write_config, capsys, name, text):
    p = write_config(name, text)
    assert cmd_dump(SCHEMA, str(p)) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("ERROR: ")
