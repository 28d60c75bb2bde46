"""Schema

A Schema is built from a declarative definition and offers:

- make_blank / make_default: build new entities
- strip_unknown_properties: remove keys the schema does not define
- cast / cast_property: coerce loosely typed input to the declared types
- validate: run the validators of a set and build an error map
- property_name: human readable names for error messages

Usage:
    contact = Schema({
        "name": "Contact",
        "properties": {
            "name": {"type": str, "validators": [required]},
            "age": {"type": int, "default_value": 0},
        },
    })

    errors = await contact.validate({"name": None, "age": 3})
    # {"name": "Name is required"}
"""
from __future__ import annotations

import asyncio
import copy
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable

from schemata.capabilities import array_schema_of, is_array_schema, is_schema
from schemata.core.config import DEFAULT_SET
from schemata.core.errors import (
    AppError,
    ErrorCode,
    Result,
    invalid_property_type,
    missing_type,
    property_not_found,
    raise_error,
    try_result_async,
)
from schemata.core.logging import bound_context, generate_correlation_id, schema_logger, validation_logger
from schemata.engines.casting import DEFAULT_CASTER, Caster
from schemata.engines.validation import ErrorMap, ValidationEngine, default_engine
from schemata.models import PropertyDescriptor, SchemaDefinition, parse_definition
from schemata.naming import convert_camelcase_to_human
from schemata.tags import has_tag
from schemata.types import resolve_type

log = schema_logger()
vlog = validation_logger()

ValidateCallback = Callable[[BaseException | None, ErrorMap | None], Any]


class Schema:
    """A named set of typed, validated properties."""

    __slots__ = ("_definition", "_engine", "_caster")

    def __init__(
        self,
        definition: Mapping[str, Any] | SchemaDefinition | None = None,
        /,
        *,
        engine: ValidationEngine | None = None,
        caster: Caster | None = None,
        **kwargs: Any,
    ):
        self._definition = parse_definition(definition, **kwargs)
        self._engine = engine or default_engine
        self._caster = caster or DEFAULT_CASTER
        log.debug("schema_created", schema_name=self.name, property_count=len(self._definition.properties))

    # =========================================================================
    # Definition access
    # =========================================================================

    @property
    def name(self) -> str:
        return self._definition.name

    @property
    def description(self) -> str | None:
        return self._definition.description

    @property
    def definition(self) -> SchemaDefinition:
        return self._definition

    @property
    def properties(self) -> Mapping[str, PropertyDescriptor]:
        """Read-only view of the property descriptors, in declaration order."""
        return MappingProxyType(self._definition.properties)

    def get_properties(self) -> dict[str, dict[str, Any]]:
        """Deep copy of the property definitions, safe to modify.

        Useful for building a derived schema:

            properties = contact.get_properties()
            properties["name"]["validators"] = []
            relaxed = Schema(name="RelaxedContact", properties=properties)
        """
        return {
            key: copy.deepcopy(descriptor.as_definition())
            for key, descriptor in self._definition.properties.items()
        }

    def property_name(self, key: str) -> str:
        """The declared name of a property, or its key made human readable."""
        descriptor = self._definition.properties.get(key)
        if descriptor is None:
            raise_error(property_not_found(key, self.name).error)
        if descriptor.name is not None:
            return descriptor.name
        return convert_camelcase_to_human(key)

    # =========================================================================
    # Entity construction
    # =========================================================================

    def make_blank(self) -> dict[str, Any]:
        """Returns an entity with every property set to its type's empty value."""
        entity: dict[str, Any] = {}
        for key, descriptor in self._definition.properties.items():
            effective = resolve_type(descriptor.type)
            if is_schema(effective):
                entity[key] = effective.make_blank()
            elif is_array_schema(effective) or effective is list:
                entity[key] = []
            elif effective is dict:
                entity[key] = {}
            elif isinstance(effective, (Mapping, list, tuple, set)):
                raise_error(invalid_property_type(key, self.name).error)
            else:
                entity[key] = None
        return entity

    def make_default(self, existing_entity: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Returns an entity filled with default values.

        Values of existing_entity are kept for keys the schema defines; keys
        it does not define are dropped.
        """
        existing = existing_entity or {}
        entity = self.make_blank()

        for key, descriptor in self._definition.properties.items():
            effective = resolve_type(descriptor.type, existing)

            if key in existing:
                value = existing[key]
                entity[key] = effective.make_default(value) if is_schema(effective) else value
            elif descriptor.has_default:
                default = descriptor.default_value
                entity[key] = default() if callable(default) else default
            elif is_schema(effective):
                entity[key] = effective.make_default()

        return entity

    # =========================================================================
    # Stripping and casting
    # =========================================================================

    def strip_unknown_properties(
        self,
        entity: Mapping[str, Any],
        tag: str | None = None,
        ignore_tag_for_sub_schemas: bool = False,
    ) -> dict[str, Any]:
        """Returns a new entity containing only the (tagged) schema properties."""
        sub_tag = None if ignore_tag_for_sub_schemas else tag
        stripped: dict[str, Any] = {}

        for key, value in entity.items():
            descriptor = self._definition.properties.get(key)
            if descriptor is None or not has_tag(descriptor, tag):
                continue

            if value is None:
                stripped[key] = None
                continue

            effective = resolve_type(descriptor.type, entity)
            if is_schema(effective):
                stripped[key] = effective.strip_unknown_properties(value, sub_tag, ignore_tag_for_sub_schemas)
            elif is_array_schema(effective):
                # Anything but a list is not a valid value for an array of schemas
                if isinstance(value, list):
                    item_schema = array_schema_of(effective)
                    stripped[key] = [
                        item_schema.strip_unknown_properties(item, sub_tag, ignore_tag_for_sub_schemas)
                        for item in value
                    ]
            else:
                stripped[key] = value

        return stripped

    def cast_property(self, type_: Any, value: Any, key: str | None = None, entity: Any = None) -> Any:
        """Cast a single value to a declared property type."""
        if type_ is None:
            raise_error(missing_type(key, self.name).error)

        effective = resolve_type(type_, entity)
        if is_schema(effective):
            return effective.cast(value) if value is not None else None

        if is_array_schema(effective):
            if not value:
                return None
            items = list(value) if isinstance(value, (list, tuple)) else [value]
            item_schema = array_schema_of(effective)
            return [item_schema.cast(item) for item in items]

        return self._caster.cast_or_raise(value, effective, key)

    def cast(self, entity: Mapping[str, Any], tag: str | None = None) -> dict[str, Any]:
        """Returns a copy of entity with its (tagged) schema properties cast.

        Keys the schema does not define are copied unchanged.
        """
        if not isinstance(entity, Mapping):
            return entity
        cast_entity = dict(entity)
        for key, value in entity.items():
            descriptor = self._definition.properties.get(key)
            if descriptor is None or descriptor.type is None or not has_tag(descriptor, tag):
                continue
            cast_entity[key] = self.cast_property(descriptor.type, value, key, entity)
        return cast_entity

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(
        self,
        entity: Any,
        set_name: str | ValidateCallback | None = DEFAULT_SET,
        tag: str | ValidateCallback | None = None,
        callback: ValidateCallback | None = None,
    ) -> Any:
        """Validate an entity against the validators of a set.

        Without a callback this returns an awaitable of the error map:

            errors = await schema.validate(entity)
            errors = await schema.validate(entity, "update", "public")

        A callback may be given as the last positional argument or by
        keyword and is called exactly once with (error, errors). Inside a
        running event loop the validation is scheduled and the task returned;
        otherwise it runs to completion before validate returns.
        """
        if callable(set_name):
            set_name, callback = DEFAULT_SET, set_name
        elif callable(tag):
            tag, callback = None, tag

        set_name = set_name or DEFAULT_SET
        if callback is None:
            return self._validate_top_level(entity, set_name, tag)

        coro = self._validate_with_callback(entity, set_name, tag, callback)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coro)
        return loop.create_task(coro)

    async def validate_result(
        self,
        entity: Any,
        set_name: str | None = DEFAULT_SET,
        tag: str | None = None,
    ) -> Result[ErrorMap, AppError]:
        """Validate returning Result type for monadic error handling."""
        return await try_result_async(
            lambda: self._validate_top_level(entity, set_name or DEFAULT_SET, tag),
            code=ErrorCode.E9001_UNEXPECTED_ERROR,
            origin="validate",
        )

    def validate_sync(
        self,
        entity: Any,
        set_name: str | None = DEFAULT_SET,
        tag: str | None = None,
    ) -> ErrorMap:
        """Validate from synchronous code. Must not be called from a running loop."""
        return asyncio.run(self._validate_top_level(entity, set_name or DEFAULT_SET, tag))

    async def validate_recursive(
        self,
        parent: Any,
        entity: Any,
        set_name: str | None = DEFAULT_SET,
        tag: str | None = None,
    ) -> ErrorMap:
        """Validate entity with the given parent; used when recursing into sub-schemas."""
        return await self._engine.validate(self, parent, entity, set_name or DEFAULT_SET, tag)

    async def _validate_top_level(self, entity: Any, set_name: str, tag: str | None) -> ErrorMap:
        with bound_context(validation_id=generate_correlation_id(), schema_name=self.name):
            vlog.debug("validation_started", set_name=set_name, tag=tag)
            try:
                errors = await self.validate_recursive(entity, entity, set_name, tag)
            except Exception as e:
                vlog.warning("validation_aborted", error=str(e), error_type=type(e).__name__)
                raise
            vlog.debug("validation_completed", error_count=len(errors))
            return errors

    async def _validate_with_callback(
        self,
        entity: Any,
        set_name: str,
        tag: str | None,
        callback: ValidateCallback,
    ) -> None:
        try:
            errors = await self._validate_top_level(entity, set_name, tag)
        except Exception as e:
            callback(e, None)
        else:
            callback(None, errors)

    # =========================================================================
    # Copying
    # =========================================================================

    def __copy__(self) -> Schema:
        return self

    def __deepcopy__(self, memo: dict) -> Schema:
        # Schemas are immutable; nested schemas are shared, not cloned
        return self

    def __repr__(self) -> str:
        return f"Schema(name={self.name!r}, properties={list(self._definition.properties)!r})"


def create_schema(definition: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Schema:
    """Build a Schema from a definition mapping or keyword arguments."""
    return Schema(definition, **kwargs)
