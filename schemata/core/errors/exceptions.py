"""Exception Wrappers for AppError

Hard errors leave schemata as exceptions carrying an AppError, so callers
can use plain try/except while still getting the typed code and context.
"""
from __future__ import annotations

from .types import AppError, ErrorCode, Result


class SchemataError(Exception):
    """Exception wrapper for AppError."""

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code


class SchemaDefinitionError(SchemataError, ValueError):
    """A schema definition (or a value cast against it) is malformed."""


class CastError(SchemaDefinitionError):
    """A value cannot be cast to the property's declared type."""


class PropertyNotFoundError(SchemataError, LookupError):
    """A property name was looked up that the schema does not define."""


class ValidatorError(SchemataError):
    """A validator raised, rejected, or called back with an error."""


_EXCEPTIONS: dict[ErrorCode, type[SchemataError]] = {
    ErrorCode.E2000_DEFINITION_GENERIC: SchemaDefinitionError,
    ErrorCode.E2001_REQUIRED_FIELD_MISSING: SchemaDefinitionError,
    ErrorCode.E2002_INVALID_FORMAT: SchemaDefinitionError,
    ErrorCode.E2003_MISSING_TYPE: SchemaDefinitionError,
    ErrorCode.E2004_INVALID_TYPE: SchemaDefinitionError,
    ErrorCode.E2005_CONSTRAINT_VIOLATION: SchemaDefinitionError,
    ErrorCode.E2012_INVALID_DATE: CastError,
    ErrorCode.E4010_NOT_FOUND: PropertyNotFoundError,
    ErrorCode.E5020_DEPENDENCY_ERROR: ValidatorError,
}


def to_exception(error: AppError) -> SchemataError:
    """Wrap an AppError in the exception class for its code."""
    return _EXCEPTIONS.get(error.code, SchemataError)(error)


def raise_error(error: AppError) -> None:
    """Raise AppError as exception.

    Usage:
        if key not in properties:
            raise_error(property_not_found(key).error)
    """
    exc = to_exception(error)
    if error.cause is not None:
        raise exc from error.cause
    raise exc


def raise_result(result: Result) -> None:
    """Raise error if Result is Err, otherwise return."""
    if result.is_err():
        raise_error(result.unwrap_err())
