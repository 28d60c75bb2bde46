# Definition model exports
from schemata.models.definition import (
    MISSING,
    PropertyDescriptor,
    SchemaDefinition,
    parse_definition,
)

__all__ = [
    "MISSING",
    "PropertyDescriptor",
    "SchemaDefinition",
    "parse_definition",
]
