"""
Attribute Mapper
----------------
Recursively applies plain data (mappings, sequences, scalars) onto a target,
collecting errors by path instead of stopping at the first one.

For each key:
- nested data (a mapping or sequence) is merged into the current value when
  the key cannot be assigned directly, or when the current value is itself
  something that accepts configuration (a struct, collection or mutable
  mapping);
- anything else is assigned with the target's writer.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Tuple

from .errors import RECORDED_ERRORS, AttributeNotFound
from .target import Target, is_mergeable, target_for

logger = logging.getLogger(__name__)

ErrorMapping = Dict[str, Exception]


def is_nested(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _entries(data: Any) -> Iterable[Tuple[Any, Any]]:
    if isinstance(data, Mapping):
        return data.items()
    if isinstance(data, (list, tuple)):
        return enumerate(data)
    raise TypeError(
        f"configuration data must be a mapping or a sequence, got {type(data).__name__}"
    )


def _should_merge(target: Target, key: Any) -> bool:
    if not target.can_set(key):
        return True
    try:
        current = target.get(key)
    except AttributeNotFound:
        # writable but not yet holding a value, e.g. an unset slot
        return False
    return is_mergeable(current)


def configure_with(data: Any, target: Any) -> ErrorMapping:
    """
    Map `data` onto `target`, returning errors keyed by path.

    Sequence data uses each element's index as its key. Errors raised by
    nested targets are re-keyed under the parent path, e.g. ``.position.y``
    or ``.services["app"].port``. Never raises for bad data; a non-container
    `data` argument is a TypeError.
    """
    adapter = target_for(target)
    errors: ErrorMapping = {}

    for key, value in _entries(data):
        path = adapter.path(key)
        try:
            if is_nested(value) and _should_merge(adapter, key):
                current = adapter.get(key)
                if current is None:
                    raise AttributeNotFound(f"nothing to configure at {path}")
                for nested_path, error in configure_with(value, current).items():
                    errors[path + nested_path] = error
            else:
                adapter.set(key, value)
        except RECORDED_ERRORS as e:
            logger.debug("config error at %s: %s", path, e)
            errors[path] = e

    return errors
