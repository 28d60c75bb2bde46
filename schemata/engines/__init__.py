# Engine exports
from schemata.engines.casting import (
    DEFAULT_CASTER,
    ArrayCast,
    BooleanCast,
    Caster,
    CastRule,
    DateCast,
    NumberCast,
    ObjectCast,
    StringCast,
    cast_value,
)
from schemata.engines.validation import (
    ValidationEngine,
    default_engine,
    gather_or_cancel,
)

__all__ = [
    "DEFAULT_CASTER",
    "ArrayCast",
    "BooleanCast",
    "Caster",
    "CastRule",
    "DateCast",
    "NumberCast",
    "ObjectCast",
    "StringCast",
    "cast_value",
    "ValidationEngine",
    "default_engine",
    "gather_or_cancel",
]
