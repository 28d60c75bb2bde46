"""Structural capability checks for schemas.

Anything exposing the schema operations counts as a schema, whether it was
built by Schema or by user code, so nested types and resolver results are
never rejected for not inheriting from a particular class.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

# Operations the engine and the helpers call on nested schemas
EXPECTED_INTERFACE: tuple[str, ...] = (
    "make_blank",
    "make_default",
    "cast",
    "cast_property",
    "strip_unknown_properties",
    "validate_recursive",
)


class SchemaLike(Protocol):
    """Protocol for anything usable as a (sub-)schema."""

    @property
    def name(self) -> str: ...

    def make_blank(self) -> dict: ...

    def make_default(self, existing_entity: Mapping | None = None) -> dict: ...

    def cast(self, entity: Mapping, tag: str | None = None) -> dict: ...

    def cast_property(self, type_: Any, value: Any, key: str | None = None, entity: Any = None) -> Any: ...

    def strip_unknown_properties(
        self, entity: Mapping, tag: str | None = None, ignore_tag_for_sub_schemas: bool = False
    ) -> dict: ...

    async def validate_recursive(
        self, parent: Any, entity: Any, set_name: str = ..., tag: str | None = None
    ) -> dict: ...


def is_schema(obj: Any) -> bool:
    """Take an object and determine whether it behaves like a schema."""
    # Classes expose these names as unbound functions, they are types not schemas
    if obj is None or isinstance(obj, type):
        return False
    if not hasattr(obj, "name"):
        return False
    return all(callable(getattr(obj, attr, None)) for attr in EXPECTED_INTERFACE)


def array_schema_of(obj: Any) -> Any:
    """Return the element schema of an array marker, or None."""
    if obj is None or isinstance(obj, type):
        return None
    if isinstance(obj, Mapping):
        return obj.get("array_schema")
    return getattr(obj, "array_schema", None)


def is_array_schema(obj: Any) -> bool:
    """Take an object and determine whether it is an array-of-schema marker."""
    return is_schema(array_schema_of(obj))
