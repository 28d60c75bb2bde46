"""Schema Definition Models

Pydantic models for the declarative part of a schema: its name and the
descriptor of every property. Definitions are parsed once, when a Schema is
built, so a malformed definition fails immediately instead of during the
first validate or cast.

Key Features:
- Accepts snake_case or camelCase keys (default_value / defaultValue)
- Tags normalized to frozensets, a single string tag is accepted
- Default values restricted to primitives or zero-argument functions
- Validators classified by arity at registration time
- Pydantic errors converted into SchemaDefinitionError
"""
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel, to_snake

from schemata.core.config import DEFAULT_SET
from schemata.core.errors import (
    AppError,
    SchemataError,
    definition_error,
    invalid_default_value,
    raise_error,
    schema_name_required,
)
from schemata.validators import Validator, as_validator


class _Missing(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


# Marks a property declared without a default_value
MISSING = _Missing.MISSING

PRIMITIVE_DEFAULTS: tuple[type, ...] = (bool, int, float, complex, str, bytes)

VALIDATORS_SHAPE = "validators must be a list or a mapping of set name to list"


class PropertyDescriptor(BaseModel):
    """Declarative description of one schema property."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        arbitrary_types_allowed=True,
    )

    type: Any = None
    tag: frozenset[str] | None = None
    name: str | None = None
    description: str | None = None
    default_value: Any = MISSING
    validators: Any = None

    @field_validator("tag", mode="before")
    @classmethod
    def single_tag(cls, v: Any) -> Any:
        return [v] if isinstance(v, str) else v

    @field_validator("default_value")
    @classmethod
    def primitive_or_function(cls, v: Any) -> Any:
        if v is MISSING or v is None or isinstance(v, PRIMITIVE_DEFAULTS) or callable(v):
            return v
        raise ValueError("default_value must be either a primitive value or a function")

    @field_validator("validators")
    @classmethod
    def classify_validators(cls, v: Any) -> Any:
        if v is None:
            return None
        if isinstance(v, Mapping):
            if not all(isinstance(fns, (list, tuple)) for fns in v.values()):
                raise ValueError(VALIDATORS_SHAPE)
            return MappingProxyType({
                str(set_name): tuple(as_validator(fn) for fn in fns)
                for set_name, fns in v.items()
            })
        if isinstance(v, (list, tuple)):
            return tuple(as_validator(fn) for fn in v)
        raise ValueError(VALIDATORS_SHAPE)

    @property
    def has_default(self) -> bool:
        return self.default_value is not MISSING

    def validators_for(self, set_name: str) -> tuple[Validator, ...]:
        """Validators registered for a set, in registration order.

        A plain list of validators belongs to the default set only.
        """
        if isinstance(self.validators, tuple):
            return self.validators if set_name == DEFAULT_SET else ()
        if self.validators is not None:
            return self.validators.get(set_name, ())
        return ()

    def as_definition(self) -> dict[str, Any]:
        """Plain-dict form, suitable for building another schema."""
        definition: dict[str, Any] = {}
        if self.type is not None:
            definition["type"] = self.type
        if self.tag is not None:
            definition["tag"] = sorted(self.tag)
        if self.name is not None:
            definition["name"] = self.name
        if self.description is not None:
            definition["description"] = self.description
        if self.has_default:
            definition["default_value"] = self.default_value
        if isinstance(self.validators, tuple):
            definition["validators"] = list(self.validators)
        elif self.validators is not None:
            definition["validators"] = {k: list(v) for k, v in self.validators.items()}
        return definition


class SchemaDefinition(BaseModel):
    """A named set of property descriptors."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    name: str = Field(min_length=1)
    description: str | None = None
    properties: dict[str, PropertyDescriptor] = Field(default_factory=dict)


def _convert(exc: ValidationError, schema_name: Any) -> AppError:
    """Turn the first pydantic error into an AppError."""
    errors = exc.errors()
    first = errors[0]
    loc = first.get("loc", ())
    schema = schema_name if isinstance(schema_name, str) else None
    key = str(loc[1]) if len(loc) >= 2 and loc[0] == "properties" else None
    attr = to_snake(str(loc[-1])) if loc else ""
    cause = first.get("ctx", {}).get("error")

    if isinstance(cause, SchemataError):
        return cause.error.with_context(schema=schema, property_path=key)
    if loc == ("name",):
        return schema_name_required(origin="schema").error
    if key is not None and attr == "default_value":
        return invalid_default_value(key, first.get("input"), schema).error
    return definition_error(
        f"Invalid schema definition at {'.'.join(str(part) for part in loc)}: {first.get('msg')}",
        schema=schema,
        field=key,
        origin="schema",
        error_count=len(errors),
    ).error


def parse_definition(definition: Any = None, **kwargs: Any) -> SchemaDefinition:
    """Parse a definition mapping (or keyword arguments) into a SchemaDefinition.

    Raises SchemaDefinitionError if the definition is malformed.
    """
    if isinstance(definition, SchemaDefinition) and not kwargs:
        return definition
    if isinstance(definition, SchemaDefinition):
        data = {
            "name": definition.name,
            "description": definition.description,
            "properties": definition.properties,
            **kwargs,
        }
    else:
        data = {**(definition or {}), **kwargs}
    try:
        return SchemaDefinition.model_validate(data)
    except ValidationError as e:
        raise_error(_convert(e, data.get("name")).chain(e))
