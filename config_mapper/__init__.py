"""
Config Mapper
-------------
Maps loosely-typed configuration data (as loaded from YAML or JSON) onto
strongly-typed objects, reporting every problem by path in a single pass.
"""

from .containers import ConfigDict, ConfigList
from .errors import (
    AttributeNotFound,
    ConfigMapperError,
    InvalidConfigRootError,
    InvalidValue,
    MappingError,
    NoValueProvided,
    SchemaDefinitionError,
    UnsupportedConfigFormatError,
)
from .loader import load_config, load_data
from .mapper import configure_with
from .struct import (
    ConfigStruct,
    attribute,
    component,
    component_dict,
    component_list,
)

__all__ = [
    "AttributeNotFound",
    "ConfigDict",
    "ConfigList",
    "ConfigMapperError",
    "ConfigStruct",
    "InvalidConfigRootError",
    "InvalidValue",
    "MappingError",
    "NoValueProvided",
    "SchemaDefinitionError",
    "UnsupportedConfigFormatError",
    "attribute",
    "component",
    "component_dict",
    "component_list",
    "configure_with",
    "load_config",
    "load_data",
]
