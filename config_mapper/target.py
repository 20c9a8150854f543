"""
Target Adapters
---------------
Uniform get/set/path access over the two kinds of thing configuration can be
written to:

- collections (mappings, lists, ConfigDict/ConfigList): keyed access, paths
  look like ``["name"]`` or ``[0]``.
- objects (ConfigStruct instances, dataclasses, plain objects): named
  attribute access, paths look like ``.name``.
"""

from __future__ import annotations

import inspect
import json
from collections.abc import Mapping, MutableMapping
from typing import Any

from .errors import AttributeNotFound, ConfigMapperError, InvalidValue

_MISSING = object()


def key_literal(key: Any) -> str:
    """Render a collection key the way it appears inside ``[...]`` in a path."""
    if isinstance(key, (str, bool)):
        return json.dumps(key)
    if isinstance(key, int):
        return str(key)
    return repr(key)


def is_collection(obj: Any) -> bool:
    """True if obj is addressed by key rather than by attribute name."""
    if isinstance(obj, (str, bytes)):
        return False
    return hasattr(type(obj), "__getitem__")


def is_mergeable(value: Any) -> bool:
    """
    True if nested source data should be merged into `value` rather than
    replacing it.

    Mutable mappings and objects with attribute storage accept merging;
    scalars, sequences and frozen (read-only) mappings are replaced.
    """
    if value is None:
        return False
    if isinstance(value, MutableMapping):
        return True
    if isinstance(value, (Mapping, list, tuple, str, bytes)):
        return False
    return hasattr(value, "__dict__")


class Target:
    """Base adapter: subclasses provide path/get/set/can_set."""

    def __init__(self, obj: Any) -> None:
        self.obj = obj

    def path(self, key: Any) -> str:
        raise NotImplementedError

    def get(self, key: Any) -> Any:
        raise NotImplementedError

    def set(self, key: Any, value: Any) -> None:
        raise NotImplementedError

    def can_set(self, key: Any) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.obj!r})"


class CollectionTarget(Target):
    """Adapter for anything indexable with ``obj[key]``."""

    def path(self, key: Any) -> str:
        return f"[{key_literal(key)}]"

    def get(self, key: Any) -> Any:
        try:
            return self.obj[key]
        except (KeyError, IndexError):
            return None
        except TypeError as e:
            raise AttributeNotFound(f"no entry {key!r} in {type(self.obj).__name__}") from e

    def set(self, key: Any, value: Any) -> None:
        if not self.can_set(key):
            raise AttributeNotFound(f"{type(self.obj).__name__} does not support assignment")
        try:
            self.obj[key] = value
        except ConfigMapperError:
            raise
        except (IndexError, KeyError) as e:
            raise AttributeNotFound(f"cannot assign entry {key!r}: {e}") from e
        except (ValueError, TypeError) as e:
            raise InvalidValue(str(e)) from e

    def can_set(self, key: Any) -> bool:
        return hasattr(type(self.obj), "__setitem__")


class ObjectTarget(Target):
    """
    Adapter for attribute access by name.

    An attribute is writable when the class defines a data descriptor with a
    setter for it (a property with fset, a declared attribute, a slot), a
    plain class-level default, or when the instance already holds a value
    under that name. Unknown names are never created.
    """

    def path(self, key: Any) -> str:
        return f".{key}"

    def get(self, key: Any) -> Any:
        name = self._name(key)
        try:
            return getattr(self.obj, name)
        except AttributeError as e:
            if isinstance(e, AttributeNotFound):
                raise
            raise AttributeNotFound(
                f"{type(self.obj).__name__!r} object has no attribute {name!r}"
            ) from e

    def set(self, key: Any, value: Any) -> None:
        name = self._name(key)
        if not self.can_set(name):
            raise AttributeNotFound(
                f"{type(self.obj).__name__!r} object has no writable attribute {name!r}"
            )
        try:
            setattr(self.obj, name, value)
        except ConfigMapperError:
            raise
        except AttributeError as e:
            raise AttributeNotFound(str(e)) from e
        except (ValueError, TypeError) as e:
            raise InvalidValue(str(e)) from e

    def can_set(self, key: Any) -> bool:
        if not isinstance(key, str) or not key.isidentifier() or key.startswith("_"):
            return False
        cls_attr = inspect.getattr_static(type(self.obj), key, _MISSING)
        if cls_attr is _MISSING:
            return key in getattr(self.obj, "__dict__", {})
        if isinstance(cls_attr, property):
            return cls_attr.fset is not None
        writable = getattr(cls_attr, "writable", None)
        if isinstance(writable, bool):
            return writable
        if hasattr(type(cls_attr), "__set__"):
            return True
        if callable(cls_attr) or isinstance(cls_attr, (staticmethod, classmethod)):
            return False
        return True

    def _name(self, key: Any) -> str:
        if not isinstance(key, str) or not key.isidentifier() or key.startswith("_"):
            raise AttributeNotFound(
                f"{type(self.obj).__name__!r} object has no attribute {key!r}"
            )
        return key


def target_for(obj: Any) -> Target:
    """Wrap obj in the adapter that matches how it is addressed."""
    if isinstance(obj, Target):
        return obj
    if is_collection(obj):
        return CollectionTarget(obj)
    return ObjectTarget(obj)
