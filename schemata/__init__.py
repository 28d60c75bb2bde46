"""Schemata

Declarative entity schemas with recursive, asynchronous validation.

Usage:
    from schemata import ArrayOf, Schema

    comment = Schema(name="Comment", properties={
        "email": {"type": str, "validators": [required]},
    })
    blog = Schema(name="Blog", properties={
        "title": {"type": str, "tag": ["auto"], "validators": [required]},
        "comments": {"type": ArrayOf(comment)},
    })

    errors = await blog.validate(post)
    # {"title": "Title is required", "comments": {1: {"email": "Email is required"}}}
"""
from schemata.capabilities import SchemaLike, is_array_schema, is_schema
from schemata.core import DEFAULT_SET, configure_logging, get_settings, settings
from schemata.core.errors import (
    AppError,
    CastError,
    Err,
    ErrorCode,
    Ok,
    PropertyNotFoundError,
    Result,
    SchemaDefinitionError,
    SchemataError,
    ValidatorError,
)
from schemata.engines import Caster, CastRule, ValidationEngine, cast_value
from schemata.models import MISSING, PropertyDescriptor, SchemaDefinition
from schemata.naming import convert_camelcase_to_human
from schemata.schema import Schema, create_schema
from schemata.tags import has_tag
from schemata.types import (
    Array,
    ArrayOf,
    Boolean,
    Date,
    Integer,
    Number,
    Object,
    String,
    resolve_type,
)
from schemata.validators import (
    Callback,
    CallbackWithParent,
    Direct,
    Validator,
    as_validator,
    callback,
    callback_with_parent,
    direct,
)

__version__ = "0.1.0"

__all__ = [
    # Schemas
    "Schema",
    "create_schema",
    "SchemaLike",
    "SchemaDefinition",
    "PropertyDescriptor",
    "MISSING",
    # Types
    "ArrayOf",
    "Array",
    "Boolean",
    "Date",
    "Integer",
    "Number",
    "Object",
    "String",
    "resolve_type",
    # Helpers
    "is_schema",
    "is_array_schema",
    "has_tag",
    "convert_camelcase_to_human",
    # Validators
    "Validator",
    "Direct",
    "Callback",
    "CallbackWithParent",
    "as_validator",
    "direct",
    "callback",
    "callback_with_parent",
    # Engines
    "ValidationEngine",
    "Caster",
    "CastRule",
    "cast_value",
    # Errors
    "AppError",
    "ErrorCode",
    "Result",
    "Ok",
    "Err",
    "SchemataError",
    "SchemaDefinitionError",
    "CastError",
    "PropertyNotFoundError",
    "ValidatorError",
    # Configuration
    "DEFAULT_SET",
    "settings",
    "get_settings",
    "configure_logging",
]
