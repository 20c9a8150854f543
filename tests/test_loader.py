"""
Tests for config_mapper.loader
------------------------------
Coverage:
- Loading YAML and JSON documents.
- Empty documents and invalid roots.
- load_config(): full integration onto a ConfigStruct.
- Failure reporting for typos and bad values.
"""

import logging

import pytest

from config_mapper import (
    InvalidConfigRootError,
    MappingError,
    UnsupportedConfigFormatError,
    load_config,
    load_data,
)
from tests.utils import AppConfig

# --- 1. load_data ---


def test_load_yaml(write_config):
    p = write_config(
        "c.yml",
        """
        a: 1
        b: [x, y]
        """,
    )
    assert load_data(p) == {"a": 1, "b": ["x", "y"]}


def test_load_json(write_config):
    p = write_config("c.json", '{"a": {"b": 2}}')
    assert load_data(str(p)) == {"a": {"b": 2}}


def test_load_list_root(write_config):
    p = write_config("c.yaml", "- 1\n- 2\n")
    assert load_data(p) == [1, 2]


def test_empty_document_is_empty_mapping(write_config):
    assert load_data(write_config("empty.yaml", "")) == {}


def test_scalar_root_is_rejected(write_config):
    with pytest.raises(InvalidConfigRootError, match="got str"):
        load_data(write_config("scalar.yaml", "just text\n"))


def test_unsupported_format(write_config):
    with pytest.raises(UnsupportedConfigFormatError, match=".toml"):
        load_data(write_config("c.toml", "a = 1\n"))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_data(tmp_path / "nope.yaml")


def test_loading_is_logged(write_config, caplog):
    p = write_config("c.yaml", "a: 1\n")
    with caplog.at_level(logging.INFO, logger="config_mapper.loader"):
        load_data(p)
    assert "loading config from" in caplog.text


# --- 2. load_config ---


def test_load_config_integration(app_yaml):
    cfg = load_config(app_yaml, AppConfig)

    assert cfg.name == "shop"
    assert cfg.debug is True
    assert cfg.position.x == 3
    assert cfg.position.y == 4
    assert cfg.services["web"].port == 8080
    assert cfg.services.keys() == ["web", "db"]
    # defaults remain for untouched fields
    assert cfg.services["db"].port == 80


def test_load_config_fails_on_typo(write_config):
    p = write_config(
        "typo.yaml",
        """
        name: shop
        position:
          x: 1
          z: 123  # <--- The Typo
        """,
    )

    with pytest.raises(MappingError, match=r"\.position\.z - ") as excinfo:
        load_config(p, AppConfig)
    assert list(excinfo.value.errors_by_field) == [".position.z"]


def test_load_config_reports_all_errors_at_once(write_config):
    p = write_config(
        "bad.yaml",
        """
        debug: sometimes
        services:
          web:
            port: eighty
        """,
    )

    with pytest.raises(MappingError) as excinfo:
        load_config(p, AppConfig)

    assert set(excinfo.value.errors_by_field) == {
        ".debug",
        '.services["web"].port',
        '.services["web"].image',
        ".name",
        ".position.x",
    }
