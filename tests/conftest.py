"""
Pytest Fixtures
---------------
Shared resources for testing.
- write_config: writes YAML/JSON text into tmp_path.
- app_yaml: a complete, valid AppConfig document.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def write_config(tmp_path: Path):
    """Returns a helper that writes dedented text to tmp_path/<name>."""

    def _write(name: str, text: str) -> Path:
        p = tmp_path / name
        p.write_text(textwrap.dedent(text), encoding="utf-8")
        return p

    return _write


@pytest.fixture
def app_yaml(write_config) -> Path:
    return write_config(
        "app.yaml",
        """
        name: shop
        debug: "yes"
        position:
          x: 3
          y: "4"
        services:
          web:
            image: nginx
            port: "8080"
          db:
            image: postgres
        """,
    )
