"""Monadic Error Handling System

Hard errors in schemata are AppErrors: built as Err values by the builder
functions and raised as SchemataError subclasses at the boundary.

Usage:
    from schemata.core.errors import property_not_found, raise_error

    if key not in properties:
        raise_error(property_not_found(key).error)
"""
from .types import (
    # Core types
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    # Constructors
    from_exception,
    try_result_async,
)

from .builders import (
    # Definition (E2xxx)
    definition_error,
    schema_name_required,
    invalid_default_value,
    invalid_property_type,
    missing_type,
    unsupported_validator,
    invalid_date,
    # Lookup (E4xxx)
    property_not_found,
    # Validators (E5xxx)
    validator_failed,
)

from .exceptions import (
    SchemataError,
    SchemaDefinitionError,
    CastError,
    PropertyNotFoundError,
    ValidatorError,
    to_exception,
    raise_error,
    raise_result,
)

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    # Constructors
    "from_exception",
    "try_result_async",
    # Definition (E2xxx)
    "definition_error",
    "schema_name_required",
    "invalid_default_value",
    "invalid_property_type",
    "missing_type",
    "unsupported_validator",
    "invalid_date",
    # Lookup (E4xxx)
    "property_not_found",
    # Validators (E5xxx)
    "validator_failed",
    # Exceptions
    "SchemataError",
    "SchemaDefinitionError",
    "CastError",
    "PropertyNotFoundError",
    "ValidatorError",
    "to_exception",
    "raise_error",
    "raise_result",
]
