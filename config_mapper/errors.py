"""
Error Taxonomy
--------------
Exceptions raised while declaring schemas and mapping data onto targets.

Mapping errors (AttributeNotFound, InvalidValue, NoValueProvided) are collected
into an error mapping keyed by path; only MappingError aggregates them into a
single raised failure.
"""

from __future__ import annotations

from typing import Any, Dict


class ConfigMapperError(Exception):
    """Base class for everything raised by config_mapper."""


class AttributeNotFound(ConfigMapperError, AttributeError):
    """The target has no reader or writer for the given key."""


class InvalidValue(ConfigMapperError, ValueError):
    """A validator or coercer rejected the raw value."""


class NoValueProvided(ConfigMapperError, ValueError):
    """A required attribute has (or would be given) no value."""

    def __init__(self, message: str = "no value provided") -> None:
        super().__init__(message)


class SchemaDefinitionError(ConfigMapperError, TypeError):
    """A declaration could not be resolved when the schema was defined."""


class InvalidConfigRootError(ConfigMapperError):
    """A loaded document is neither a mapping nor a sequence."""


class UnsupportedConfigFormatError(ConfigMapperError):
    """The file suffix does not name a supported format."""


# Errors the mapper records instead of propagating.
RECORDED_ERRORS = (AttributeNotFound, InvalidValue, NoValueProvided)


class MappingError(ConfigMapperError):
    """
    Raised by the construct-or-raise helpers when configuration failed.

    Carries the full error mapping in `errors_by_field`; the message lists
    one line per path.
    """

    def __init__(self, errors_by_field: Dict[str, Any]) -> None:
        self.errors_by_field = dict(errors_by_field)
        super().__init__(self._generate_message())

    def _generate_message(self) -> str:
        lines = ["configuration error"]
        for path, error in self.errors_by_field.items():
            lines.append(f"  {path} - {error}")
        return "\n".join(lines)
