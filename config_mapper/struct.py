"""
Configuration Structs
---------------------
Declarative configuration containers.

A ConfigStruct subclass declares its configurable surface in the class body:

    class Server(ConfigStruct):
        name = attribute(description="host name")
        port = attribute(int, default=5000)
        position = component({"x": attribute(int), "y": attribute(int)})
        services = component_dict(Service, key_type=str)

Declarations are collected once per class (ancestors first, so a subclass
redeclaring a name replaces it) and are read-only from then on.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import MISSING
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Optional

from . import validator as validators
from .containers import (
    ConfigDict,
    ConfigList,
    collect_errors,
    entry_doc,
    plain_value,
    resolve_factory,
)
from .errors import MappingError, NoValueProvided, SchemaDefinitionError
from .mapper import ErrorMapping, configure_with

logger = logging.getLogger(__name__)

IMMUTABLE_TYPES = (
    type(None),
    str,
    bytes,
    int,
    float,
    complex,
    Decimal,
    PurePath,
    Enum,
    date,
    time,
    timedelta,
    frozenset,
)


def freeze(value: Any) -> Any:
    """Return an immutable equivalent of a default value, where one exists."""
    if isinstance(value, IMMUTABLE_TYPES):
        return value
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, set):
        return frozenset(value)
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    return value


def is_frozen(value: Any) -> bool:
    if isinstance(value, IMMUTABLE_TYPES):
        return True
    if isinstance(value, tuple):
        return all(is_frozen(v) for v in value)
    if isinstance(value, MappingProxyType):
        return all(is_frozen(v) for v in value.values())
    return False


# -----------------------------
# Declarations
# -----------------------------
class Declaration:
    """
    Base for everything declared in a ConfigStruct body.

    Acts as a descriptor; values live in the instance ``__dict__`` under the
    declared name.
    """

    writable = False

    def __init__(self, description: Optional[str] = None) -> None:
        self._name: Optional[str] = None
        self._description = description

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def path(self) -> str:
        return f".{self._name}"

    def __set_name__(self, owner: type, name: str) -> None:
        if self._name is None:
            self._name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        try:
            return instance.__dict__[self._name]
        except KeyError:
            raise AttributeError(self._name) from None

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(f"{self._name!r} is read-only")

    def initial_value(self) -> Any:
        raise NotImplementedError

    def config_errors(self, instance: Any) -> ErrorMapping:
        return {}

    def config_doc(self) -> Dict[str, Dict[str, Any]]:
        if self._description is None:
            return {}
        return {self.path: {"description": self._description}}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name}>"


class Attribute(Declaration):
    """A scalar (or opaque) value with an optional validator and default."""

    writable = True

    def __init__(
        self,
        validator: Any = None,
        *,
        default: Any = MISSING,
        required: Optional[bool] = None,
        description: Optional[str] = None,
    ) -> None:
        super().__init__(description)
        self._validator = validators.resolve(validator)
        if default is MISSING:
            self._default = None
        else:
            self._default = freeze(default)
        self._copy_default = not is_frozen(self._default)
        self._required = (default is MISSING) if required is None else bool(required)

    @property
    def validator(self) -> Optional[validators.Validator]:
        return self._validator

    @property
    def default(self) -> Any:
        return self._default

    @property
    def required(self) -> bool:
        return self._required

    def __set__(self, instance: Any, value: Any) -> None:
        if value is None:
            if self._required:
                raise NoValueProvided()
        elif self._validator is not None:
            value = self._validator(value)
        instance.__dict__[self._name] = value

    def initial_value(self) -> Any:
        if self._copy_default:
            return copy.deepcopy(self._default)
        return self._default

    def config_errors(self, instance: Any) -> ErrorMapping:
        if self._required and instance.__dict__.get(self._name) is None:
            return {self.path: NoValueProvided()}
        return {}

    def config_doc(self) -> Dict[str, Dict[str, Any]]:
        doc: Dict[str, Any] = {}
        if self._description is not None:
            doc["description"] = self._description
        if self._default is not None:
            doc["default"] = plain_value(self._default)
        if self._validator is not None and self._validator.type_name:
            doc["type"] = self._validator.type_name
        return {self.path: doc}


def _entry_type(type_: Any) -> Any:
    if type_ is None:
        return ConfigStruct
    if isinstance(type_, Mapping):
        # inline declaration block
        return type("Component", (ConfigStruct,), dict(type_))
    resolve_factory(type_)
    return type_


class Component(Declaration):
    """A nested sub-object, created fresh for every struct instance."""

    def __init__(self, type_: Any = None, *, description: Optional[str] = None) -> None:
        super().__init__(description)
        self._inline = isinstance(type_, Mapping)
        self._type = _entry_type(type_)

    @property
    def type(self) -> Any:
        return self._type

    def __set_name__(self, owner: type, name: str) -> None:
        super().__set_name__(owner, name)
        if self._inline:
            self._type.__name__ = name
            self._type.__qualname__ = f"{owner.__qualname__}.{name}"

    def initial_value(self) -> Any:
        return self._type()

    def config_errors(self, instance: Any) -> ErrorMapping:
        errors: ErrorMapping = {}
        collect_errors(self.path, instance.__dict__.get(self._name), errors)
        return errors

    def config_doc(self) -> Dict[str, Dict[str, Any]]:
        doc = super().config_doc()
        doc.update(entry_doc(self.path, self._type))
        return doc


class ComponentDict(Component):
    """A ConfigDict of entries of the declared type."""

    wildcard = "[X]"

    def __init__(
        self,
        type_: Any = None,
        *,
        key_type: Any = None,
        description: Optional[str] = None,
    ) -> None:
        super().__init__(type_, description=description)
        self._key_validator = validators.resolve(key_type)

    @property
    def key_validator(self) -> Optional[validators.Validator]:
        return self._key_validator

    def initial_value(self) -> ConfigDict:
        return ConfigDict(self._type, self._key_validator)

    def config_doc(self) -> Dict[str, Dict[str, Any]]:
        doc = Declaration.config_doc(self)
        doc.update(entry_doc(self.path + self.wildcard, self._type))
        return doc


class ComponentList(Component):
    """A ConfigList of entries of the declared type."""

    wildcard = "[N]"

    def initial_value(self) -> ConfigList:
        return ConfigList(self._type)

    def config_doc(self) -> Dict[str, Dict[str, Any]]:
        doc = Declaration.config_doc(self)
        doc.update(entry_doc(self.path + self.wildcard, self._type))
        return doc


def attribute(
    validator: Any = None,
    *,
    default: Any = MISSING,
    required: Optional[bool] = None,
    description: Optional[str] = None,
) -> Attribute:
    """
    Declare an attribute.

    Without a `default` the attribute is required: it is reported by
    config_errors() until given a value, and assigning None raises
    NoValueProvided. With a default (even None) it is optional, and None
    is stored without running the validator.

    `validator` may be a type (int, float, str, bool, Decimal, Path), a type
    name ("integer", "string", ...) or any single-argument callable.
    """
    return Attribute(validator, default=default, required=required, description=description)


def component(type_: Any = None, *, description: Optional[str] = None) -> Component:
    """
    Declare a sub-component.

    `type_` is a class (or zero-argument callable) to instantiate, or a
    mapping of declarations defining an inline ConfigStruct subclass.
    """
    return Component(type_, description=description)


def component_dict(
    type_: Any = None, *, key_type: Any = None, description: Optional[str] = None
) -> ComponentDict:
    """Declare a dictionary of sub-components, keyed via `key_type` if given."""
    return ComponentDict(type_, key_type=key_type, description=description)


def component_list(type_: Any = None, *, description: Optional[str] = None) -> ComponentList:
    """Declare a list of sub-components, indexed from 0."""
    return ComponentList(type_, description=description)


# -----------------------------
# ConfigStruct
# -----------------------------
class ConfigStruct:
    """Base class for declared configuration containers."""

    _declarations: ClassVar[Mapping[str, Declaration]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        declarations: Dict[str, Declaration] = {}
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, Declaration):
                    if value.name != name:
                        raise SchemaDefinitionError(
                            f"{cls.__qualname__}.{name} reuses the declaration of {value.name!r}"
                        )
                    declarations[name] = value
                elif name in declarations:
                    del declarations[name]
        cls._declarations = MappingProxyType(declarations)

    def __init__(self, **values: Any) -> None:
        for name, declaration in self._declarations.items():
            self.__dict__[name] = declaration.initial_value()
        for name, value in values.items():
            declaration = self._declarations.get(name)
            if declaration is None or not declaration.writable:
                raise TypeError(
                    f"{type(self).__name__}() got an unexpected keyword argument {name!r}"
                )
            setattr(self, name, value)

    @classmethod
    def declarations(cls) -> Mapping[str, Declaration]:
        return cls._declarations

    def config_errors(self) -> ErrorMapping:
        """Required attributes still unset, including those of components."""
        errors: ErrorMapping = {}
        for declaration in self._declarations.values():
            errors.update(declaration.config_errors(self))
        return errors

    def configure_with(self, data: Any) -> ErrorMapping:
        """Map `data` onto this struct; returns mapping errors plus config_errors()."""
        errors = configure_with(data, self)
        for path, error in self.config_errors().items():
            errors.setdefault(path, error)
        return errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            name: plain_value(self.__dict__.get(name)) for name in self._declarations
        }

    @classmethod
    def config_doc(cls) -> Dict[str, Dict[str, Any]]:
        """Documentation for every declared path, sorted by path."""
        doc: Dict[str, Dict[str, Any]] = {}
        for declaration in cls._declarations.values():
            doc.update(declaration.config_doc())
        return dict(sorted(doc.items()))

    @classmethod
    def from_data(cls, data: Any) -> "ConfigStruct":
        """Build an instance from `data`, raising MappingError if anything failed."""
        instance = cls()
        errors = instance.configure_with(data)
        if errors:
            logger.warning("%s: %d configuration error(s)", cls.__qualname__, len(errors))
            raise MappingError(errors)
        return instance

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={self.__dict__.get(name)!r}" for name in self._declarations)
        return f"{type(self).__name__}({fields})"
