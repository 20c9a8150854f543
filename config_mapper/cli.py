"""
Config Mapper CLI

Check configuration files against a ConfigStruct schema, print the schema's
documentation, or dump the fully-defaulted configuration.

Schemas are named as ``package.module:ClassName``.
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import yaml

from .errors import ConfigMapperError, MappingError
from .loader import load_data
from .struct import ConfigStruct

logger = logging.getLogger(__name__)


# -----------------------------
# Helpers
# -----------------------------
def _default(x: Any) -> Any:
    if isinstance(x, Path):
        return str(x)
    if hasattr(x, "__dict__"):
        return dict(x.__dict__)
    return str(x)


def _print_json(obj: Any) -> None:
    print(json.dumps(obj, indent=2, default=_default))


def _print_compact_json(obj: Any) -> None:
    print(json.dumps(obj, default=_default, separators=(",", ":")))


def _describe_errors(errors: Dict[str, Exception]) -> Dict[str, str]:
    return {path: f"{type(e).__name__}: {e}" for path, e in errors.items()}


def _load_or_report(config_path: str) -> Any:
    """Load a config file, printing an ERROR line to stderr if it cannot be read."""
    try:
        return load_data(config_path)
    except (OSError, ConfigMapperError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return None


def resolve_schema(target: str) -> type:
    """Import ``module:ClassName`` and check that it names a ConfigStruct."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"schema must look like 'package.module:ClassName', got {target!r}")

    obj: Any = importlib.import_module(module_name)
    for part in attr.split("."):
        obj = getattr(obj, part)

    if not (isinstance(obj, type) and issubclass(obj, ConfigStruct)):
        raise TypeError(f"{target} is not a ConfigStruct subclass")
    logger.debug("resolved schema %s", target)
    return obj


# -----------------------------
# Commands
# -----------------------------
def cmd_check(schema: str, config_path: str) -> int:
    struct_cls = resolve_schema(schema)
    data = _load_or_report(config_path)
    if data is None:
        return 1
    errors = struct_cls().configure_with(data)
    _print_compact_json(_describe_errors(errors))
    return 1 if errors else 0


def cmd_doc(schema: str) -> int:
    struct_cls = resolve_schema(schema)
    _print_json(struct_cls.config_doc())
    return 0


def cmd_dump(schema: str, config_path: str) -> int:
    struct_cls = resolve_schema(schema)
    data = _load_or_report(config_path)
    if data is None:
        return 1
    try:
        config = struct_cls.from_data(data)
    except MappingError as e:
        _print_compact_json(_describe_errors(e.errors_by_field))
        return 1
    _print_json(config.to_dict())
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="config-mapper", description="Map configuration files onto typed schemas"
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # ---------------- check ----------------
    p_check = sub.add_parser("check", help="Report every configuration error by path")
    p_check.add_argument("--schema", required=True)
    p_check.add_argument("--config", required=True)

    # ---------------- doc ----------------
    p_doc = sub.add_parser("doc", help="Print schema documentation as JSON")
    p_doc.add_argument("--schema", required=True)

    # ---------------- dump ----------------
    p_dump = sub.add_parser("dump", help="Print the configuration with defaults applied")
    p_dump.add_argument("--schema", required=True)
    p_dump.add_argument("--config", required=True)

    args = p.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.cmd == "check":
        return cmd_check(args.schema, args.config)

    if args.cmd == "doc":
        return cmd_doc(args.schema)

    return cmd_dump(args.schema, args.config)


if __name__ == "__main__":
    sys.exit(main())
