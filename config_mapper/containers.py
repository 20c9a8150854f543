"""
Component Collections
---------------------
Lazily-populated containers of configuration entries.

- ConfigDict: entries keyed by (optionally validated/coerced) keys.
- ConfigList: entries keyed by non-negative integer index.

Entries are created on first access with ``collection[key]`` and the same
entry is returned on every later access. Enumeration only ever sees entries
that already exist.
"""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Tuple

from . import validator
from .errors import InvalidValue, SchemaDefinitionError
from .target import key_literal


def resolve_factory(arg: Any) -> Callable[[], Any]:
    """Accept a class or zero-argument callable used to create new entries."""
    if callable(arg):
        return arg
    raise SchemaDefinitionError(f"invalid entry factory: {arg!r}")


def plain_value(value: Any) -> Any:
    """Convert nested configuration objects to plain dicts and lists."""
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, ConfigList):
        return value.to_list()
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, (dict, MappingProxyType)):
        return {k: plain_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [plain_value(v) for v in value]
    return value


def collect_errors(prefix: str, value: Any, errors: Dict[str, Exception]) -> None:
    """Merge value.config_errors(), if it has any, into errors under prefix."""
    config_errors = getattr(value, "config_errors", None)
    if not callable(config_errors):
        return
    for path, error in config_errors().items():
        errors[prefix + path] = error


def entry_doc(prefix: str, entry_type: Any) -> Dict[str, Dict[str, Any]]:
    """Documentation of entry_type, if it documents itself, under prefix."""
    config_doc = getattr(entry_type, "config_doc", None)
    if not callable(config_doc):
        return {}
    return {prefix + path: doc for path, doc in config_doc().items()}


class ConfigDict:
    """
    Dictionary of configuration entries, created on demand.

    If a key validator is given, every key is passed through it before
    lookup; InvalidValue from the validator propagates to the caller.
    """

    def __init__(self, entry_factory: Any, key_validator: Any = None) -> None:
        self._entry_factory = resolve_factory(entry_factory)
        self._key_validator = validator.resolve(key_validator)
        self._entries: Dict[Any, Any] = {}

    def _coerce_key(self, key: Any) -> Any:
        if self._key_validator is None:
            return key
        return self._key_validator(key)

    def __getitem__(self, key: Any) -> Any:
        key = self._coerce_key(key)
        try:
            return self._entries[key]
        except KeyError:
            entry = self._entries[key] = self._entry_factory()
            return entry

    def __contains__(self, key: Any) -> bool:
        try:
            return self._coerce_key(key) in self._entries
        except InvalidValue:
            return False

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> List[Any]:
        return list(self._entries.keys())

    def values(self) -> List[Any]:
        return list(self._entries.values())

    def items(self) -> List[Tuple[Any, Any]]:
        return list(self._entries.items())

    def config_errors(self) -> Dict[str, Exception]:
        errors: Dict[str, Exception] = {}
        for key, entry in self._entries.items():
            collect_errors(f"[{key_literal(key)}]", entry, errors)
        return errors

    def to_dict(self) -> Dict[Any, Any]:
        return {key: plain_value(entry) for key, entry in self._entries.items()}

    def __repr__(self) -> str:
        return f"ConfigDict({self._entries!r})"


class ConfigList:
    """
    List of configuration entries, created on demand by index.

    Iteration yields existing entries in index order.
    """

    def __init__(self, entry_factory: Any) -> None:
        self._entry_factory = resolve_factory(entry_factory)
        self._entries: Dict[int, Any] = {}

    @staticmethod
    def _index(index: Any) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidValue(f"list index must be an integer, got {index!r}")
        if index < 0:
            raise InvalidValue(f"list index must not be negative, got {index}")
        return index

    def __getitem__(self, index: Any) -> Any:
        index = self._index(index)
        try:
            return self._entries[index]
        except KeyError:
            entry = self._entries[index] = self._entry_factory()
            return entry

    def __contains__(self, entry: Any) -> bool:
        return any(e is entry for e in self._entries.values())

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values())

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> List[int]:
        return sorted(self._entries)

    def values(self) -> List[Any]:
        return [self._entries[i] for i in self.keys()]

    def items(self) -> List[Tuple[int, Any]]:
        return [(i, self._entries[i]) for i in self.keys()]

    def config_errors(self) -> Dict[str, Exception]:
        errors: Dict[str, Exception] = {}
        for index, entry in self.items():
            collect_errors(f"[{index}]", entry, errors)
        return errors

    def to_list(self) -> List[Any]:
        # unmaterialized gaps come out as None so indexes keep their position
        result: List[Any] = [None] * (max(self._entries) + 1 if self._entries else 0)
        for index, entry in self._entries.items():
            result[index] = plain_value(entry)
        return result

    def __repr__(self) -> str:
        return f"ConfigList({self.values()!r})"

