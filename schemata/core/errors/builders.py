"""Domain-Specific Error Builders

Ergonomic constructors for the hard errors schemata can raise.
Each builder creates an AppError with the appropriate code and context.
"""
from typing import Any

from .types import AppError, ErrorCode, ErrorContext, Err


# =============================================================================
# Definition Errors (E2xxx)
# =============================================================================

def definition_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_DEFINITION_GENERIC,
    schema: str | None = None,
    field: str | None = None,
    origin: str = "",
    cause: BaseException | None = None,
    **metadata,
) -> Err[AppError]:
    """Create schema definition error."""
    meta = {"field": field, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin, schema=schema, property_path=field),
        metadata={k: v for k, v in meta.items() if v is not None},
        cause=cause,
    ))


def schema_name_required(origin: str = "") -> Err[AppError]:
    return definition_error(
        "Schema name is required",
        code=ErrorCode.E2001_REQUIRED_FIELD_MISSING,
        field="name",
        origin=origin,
    )


def invalid_default_value(field: str, value: Any, schema: str | None = None) -> Err[AppError]:
    return definition_error(
        f'The default_value for the schema property "{field}" must be either a primitive value or a function',
        code=ErrorCode.E2005_CONSTRAINT_VIOLATION,
        schema=schema,
        field=field,
        origin="schema",
        value_type=type(value).__name__,
    )


def invalid_property_type(field: str, schema: str | None = None) -> Err[AppError]:
    return definition_error(
        f"Invalid property type on '{field}'",
        code=ErrorCode.E2004_INVALID_TYPE,
        schema=schema,
        field=field,
        origin="make_blank",
    )


def missing_type(field: str | None = None, schema: str | None = None) -> Err[AppError]:
    return definition_error(
        "Missing type",
        code=ErrorCode.E2003_MISSING_TYPE,
        schema=schema,
        field=field,
        origin="cast",
    )


def unsupported_validator(validator: Any, arity: int | None, field: str | None = None) -> Err[AppError]:
    shape = "unknown" if arity is None else str(arity)
    return definition_error(
        f"Validator {getattr(validator, '__name__', repr(validator))} must accept 3, 4 or 5 arguments, got {shape}",
        code=ErrorCode.E2004_INVALID_TYPE,
        field=field,
        origin="validators",
        arity=arity,
    )


def invalid_date(value: Any, field: str | None = None) -> Err[AppError]:
    return definition_error(
        f"Cannot cast {value!r} to a date",
        code=ErrorCode.E2012_INVALID_DATE,
        field=field,
        origin="cast",
        value=repr(value)[:50],
    )


# =============================================================================
# Lookup Errors (E4xxx)
# =============================================================================

def property_not_found(field: str, schema: str | None = None) -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E4010_NOT_FOUND,
        message=f"No property '{field}' in schema",
        context=ErrorContext(origin="property_name", schema=schema, property_path=field),
        metadata={"field": field},
    ))


# =============================================================================
# Validator Errors (E5xxx)
# =============================================================================

def validator_failed(
    field: str,
    cause: BaseException | Any,
    *,
    schema: str | None = None,
) -> Err[AppError]:
    """A validator raised, rejected or called back with an error."""
    exc = cause if isinstance(cause, BaseException) else None
    return Err(AppError(
        code=ErrorCode.E5020_DEPENDENCY_ERROR,
        message=str(cause) or f"Validator for '{field}' failed",
        context=ErrorContext(origin="validator", schema=schema, property_path=field),
        metadata={"field": field, "error_type": type(cause).__name__},
        cause=exc,
    ))

