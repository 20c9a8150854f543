"""
Validator Resolution
--------------------
Turns a type tag or callable into a single-argument coercer that converts a
raw value or raises InvalidValue.

Resolution happens once, when an attribute is declared, so that a bad
declaration fails at class-definition time rather than on first use.
"""

from __future__ import annotations

import math
import os
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .errors import InvalidValue, SchemaDefinitionError

TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
FALSE_STRINGS = frozenset({"false", "no", "off", "0"})


def _to_int(arg: Any) -> int:
    if isinstance(arg, bool):
        raise TypeError(f"expected an integer, got {arg!r}")
    if isinstance(arg, int):
        return arg
    if isinstance(arg, (float, Decimal)):
        if not math.isfinite(arg) or int(arg) != arg:
            raise ValueError(f"{arg!r} is not a whole number")
        return int(arg)
    if isinstance(arg, str):
        return int(arg.strip())
    raise TypeError(f"expected an integer, got {type(arg).__name__}")


def _to_float(arg: Any) -> float:
    if isinstance(arg, bool):
        raise TypeError(f"expected a number, got {arg!r}")
    if isinstance(arg, (int, float, Decimal)):
        return float(arg)
    if isinstance(arg, str):
        return float(arg.strip())
    raise TypeError(f"expected a number, got {type(arg).__name__}")


def _to_str(arg: Any) -> str:
    if isinstance(arg, str):
        return arg
    if isinstance(arg, (bool, int, float, Decimal)):
        return str(arg)
    raise TypeError(f"expected a string, got {type(arg).__name__}")


def _to_bool(arg: Any) -> bool:
    if isinstance(arg, bool):
        return arg
    if isinstance(arg, str):
        s = arg.strip().lower()
        if s in TRUE_STRINGS:
            return True
        if s in FALSE_STRINGS:
            return False
        raise ValueError(f"{arg!r} is not a boolean")
    if isinstance(arg, int) and arg in (0, 1):
        return bool(arg)
    raise TypeError(f"expected a boolean, got {arg!r}")


def _to_decimal(arg: Any) -> Decimal:
    if isinstance(arg, bool):
        raise TypeError(f"expected a number, got {arg!r}")
    if isinstance(arg, Decimal):
        return arg
    if isinstance(arg, (int, float, str)):
        try:
            return Decimal(str(arg).strip())
        except InvalidOperation:
            raise ValueError(f"{arg!r} is not a decimal number") from None
    raise TypeError(f"expected a number, got {type(arg).__name__}")


def _to_path(arg: Any) -> Path:
    if isinstance(arg, (str, os.PathLike)):
        return Path(arg)
    raise TypeError(f"expected a path, got {type(arg).__name__}")


COERCERS: Dict[type, Callable[[Any], Any]] = {
    int: _to_int,
    float: _to_float,
    str: _to_str,
    bool: _to_bool,
    Decimal: _to_decimal,
    Path: _to_path,
}

TYPE_TAGS: Dict[str, type] = {
    "int": int,
    "integer": int,
    "float": float,
    "str": str,
    "string": str,
    "bool": bool,
    "boolean": bool,
    "decimal": Decimal,
    "path": Path,
}


class Validator:
    """
    A resolved coercer.

    Calling it returns the converted value; ValueError and TypeError raised
    by the wrapped function are re-raised as InvalidValue.
    """

    __slots__ = ("func", "type_name")

    def __init__(self, func: Callable[[Any], Any], type_name: Optional[str] = None) -> None:
        self.func = func
        self.type_name = type_name

    def __call__(self, arg: Any) -> Any:
        try:
            return self.func(arg)
        except InvalidValue:
            raise
        except (ValueError, TypeError) as e:
            raise InvalidValue(str(e)) from e

    def __repr__(self) -> str:
        return f"Validator({self.type_name or self.func!r})"


def resolve(arg: Any) -> Optional[Validator]:
    """
    Resolve a type tag or callable into a Validator.

    Accepts None (no validation), an existing Validator, a supported type or
    type name, or any single-argument callable.
    """
    if arg is None or isinstance(arg, Validator):
        return arg

    if isinstance(arg, str):
        tag = TYPE_TAGS.get(arg.strip().lower())
        if tag is None:
            raise SchemaDefinitionError(f"unknown type tag: {arg!r}")
        arg = tag

    if isinstance(arg, type):
        return Validator(COERCERS.get(arg, arg), arg.__name__)

    if callable(arg):
        return Validator(arg)

    raise SchemaDefinitionError(f"cannot use {arg!r} as a validator")
