"""
Config Loading
--------------
Reads YAML or JSON documents into plain data and optionally maps them onto a
ConfigStruct in one step.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Type, TypeVar

import yaml

from .errors import InvalidConfigRootError, UnsupportedConfigFormatError
from .struct import ConfigStruct

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=ConfigStruct)

YAML_SUFFIXES = (".yaml", ".yml")


def load_data(path: str | Path) -> Any:
    """
    Load a configuration document.

    The file is read once; an empty document yields an empty dict. The root
    must be a mapping or a sequence.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = p.suffix.lower()
    logger.info("loading config from %s", p)

    with open(p, "r", encoding="utf-8") as f:
        if suffix in YAML_SUFFIXES:
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise UnsupportedConfigFormatError(f"Unsupported config format: {p.suffix!r}")

    if data is None:
        data = {}

    if not isinstance(data, (dict, list)):
        raise InvalidConfigRootError(
            f"Config root must be a mapping or a list, got {type(data).__name__} in {path}"
        )
    return data


def load_config(path: str | Path, struct_cls: Type[S]) -> S:
    """Load `path` and build a `struct_cls`, raising MappingError on any error."""
    return struct_cls.from_data(load_data(path))
