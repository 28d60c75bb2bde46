"""Recursive Validation Engine

Validates an entity against a schema and builds the error map:

- Properties filtered by tag, then validated concurrently as tasks
- Own validators for the requested set run sequentially; first failure wins
- Sub-schema and array-of-schema properties recurse, carrying the parent
- Array elements are independent tasks, keyed by the index they were
  dispatched with, so completion order never affects the map
- A hard error (a validator raising or calling back with an error) cancels
  all outstanding work and propagates; no partial map is ever returned
"""
from __future__ import annotations

import asyncio
import math
from collections.abc import Mapping
from contextlib import nullcontext
from typing import TYPE_CHECKING, Any, Awaitable, Iterable, TypeVar

from schemata.capabilities import array_schema_of, is_array_schema, is_schema
from schemata.core.config import DEFAULT_SET, settings
from schemata.core.errors import SchemataError, raise_error, validator_failed
from schemata.core.logging import validation_logger
from schemata.tags import has_tag
from schemata.types import resolve_type

if TYPE_CHECKING:
    from schemata.models import PropertyDescriptor
    from schemata.schema import Schema

T = TypeVar("T")

log = validation_logger()

ErrorMap = dict[Any, Any]


def value_of(entity: Any, key: str) -> Any:
    """Read a property from a mapping or an attribute-style record."""
    if isinstance(entity, Mapping):
        return entity.get(key)
    return getattr(entity, key, None)


def skips_recursion(value: Any) -> bool:
    """Falsy scalars, NaN and empty lists are not recursed into."""
    if value is None or value is False:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, (str, int, float, list)):
        return not value
    return False


async def gather_or_cancel(aws: Iterable[Awaitable[T]]) -> list[T]:
    """Run awaitables as tasks; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        # Wait for the cancelled tasks so no exception goes unretrieved
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class ValidationEngine:
    """Builds error maps for Schema instances.

    Usage:
        engine = ValidationEngine(max_concurrent=50)
        errors = await engine.validate(schema, entity, entity)
    """

    def __init__(self, max_concurrent: int | None = None):
        self.max_concurrent = max_concurrent

    async def validate(
        self,
        schema: Schema,
        parent: Any,
        entity: Any,
        set_name: str | None = DEFAULT_SET,
        tag: str | None = None,
    ) -> ErrorMap:
        """Validate one level of an entity, recursing into sub-schemas."""
        set_name = set_name or DEFAULT_SET
        keys = [key for key, descriptor in schema.properties.items() if has_tag(descriptor, tag)]
        results = await gather_or_cancel(
            self._validate_property(schema, parent, entity, key, set_name, tag)
            for key in keys
        )
        return {key: error for key, error in zip(keys, results) if error}

    async def _validate_property(
        self,
        schema: Schema,
        parent: Any,
        entity: Any,
        key: str,
        set_name: str,
        tag: str | None,
    ) -> Any:
        descriptor = schema.properties[key]
        human_name = schema.property_name(key)

        error = await self._run_validators(schema, descriptor, key, human_name, entity, parent, set_name)
        if error:
            return error

        value = value_of(entity, key)
        if skips_recursion(value):
            return None

        effective = resolve_type(descriptor.type, entity)
        if is_schema(effective):
            return await effective.validate_recursive(parent, value, set_name, tag) or None
        if is_array_schema(effective) and isinstance(value, list):
            return await self._validate_array(array_schema_of(effective), parent, value, set_name, tag)
        return None

    async def _run_validators(
        self,
        schema: Schema,
        descriptor: PropertyDescriptor,
        key: str,
        human_name: str,
        entity: Any,
        parent: Any,
        set_name: str,
    ) -> Any:
        for validator in descriptor.validators_for(set_name):
            try:
                invalid = await validator.run(key, human_name, entity, parent)
            except SchemataError:
                raise
            except Exception as e:
                log.warning("validator_failed", schema_name=schema.name, property_key=key, error=str(e))
                raise_error(validator_failed(key, e, schema=schema.name).error)
            if invalid:
                return invalid
        return None

    async def _validate_array(
        self,
        array_schema: Any,
        parent: Any,
        items: list,
        set_name: str,
        tag: str | None,
    ) -> ErrorMap | None:
        limit = asyncio.Semaphore(self.max_concurrent) if self.max_concurrent else nullcontext()

        async def validate_item(index: int, item: Any) -> tuple[int, ErrorMap]:
            async with limit:
                return index, await array_schema.validate_recursive(parent, item, set_name, tag)

        results = await gather_or_cancel(
            validate_item(index, item) for index, item in enumerate(items)
        )
        errors = {index: nested for index, nested in results if nested}
        return errors or None


# Shared engine for schemas built without one
default_engine = ValidationEngine(max_concurrent=settings.MAX_CONCURRENT_VALIDATIONS)
