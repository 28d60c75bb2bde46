"""Property type markers and type resolution.

A property's declared type is one of:
- a primitive marker (bool, int, float, str, dict, list, datetime)
- a schema (anything is_schema accepts)
- an ArrayOf marker wrapping a schema
- a resolver function called with the entity being processed

resolve_type() is the single place a declared type is turned into the
effective type for an entity.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Union

from schemata.capabilities import SchemaLike, is_schema
from schemata.core.errors import definition_error, raise_error

# Readable aliases for the primitive markers
Boolean = bool
Number = float
Integer = int
String = str
Object = dict
Array = list
Date = datetime

PRIMITIVE_TYPES: tuple[type, ...] = (bool, int, float, str, dict, list, datetime)

TypeResolver = Callable[[Any], Any]
PropertyType = Union[type, SchemaLike, "ArrayOf", TypeResolver, None]


@dataclass(frozen=True, slots=True)
class ArrayOf:
    """Array type whose every element is validated, cast and stripped by a schema.

    Accepts a schema or a zero-argument function returning one, which lets
    schemas that are defined later (or that refer to each other) be used:

        comments = {"type": ArrayOf(create_comment_schema)}
    """
    array_schema: SchemaLike

    def __post_init__(self) -> None:
        schema = self.array_schema
        if callable(schema) and not is_schema(schema):
            schema = schema()
            object.__setattr__(self, "array_schema", schema)
        if not is_schema(schema):
            raise_error(definition_error(
                f"ArrayOf requires a schema, got {type(schema).__name__}",
                origin="array_of",
            ).error)

    def __repr__(self) -> str:
        return f"ArrayOf({getattr(self.array_schema, 'name', self.array_schema)!r})"


def is_resolver(type_: Any) -> bool:
    """True for declared types that must be called with the entity."""
    return callable(type_) and not isinstance(type_, type) and not is_schema(type_)


def resolve_type(type_: Any, entity: Any = None) -> Any:
    """Get the effective type of a property for the given entity.

    Non-callable types, classes and schemas are returned unchanged. Resolver
    functions are called with the entity (None when there is no entity
    context) and their result is returned as-is, without further resolution.
    Results are never cached: the same resolver may pick different schemas
    for different entities.
    """
    if not is_resolver(type_):
        return type_
    return type_(entity)
