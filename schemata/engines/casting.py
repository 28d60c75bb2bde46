"""Primitive Casting Rules

Casting turns loosely typed input (form posts, query strings, JSON) into
values of a property's primitive type marker. Empty input becomes None
(or an empty list for arrays) and only dates that cannot be parsed are
reported as errors.

Features:
- One rule per primitive marker, matched by type identity
- Rules return Result values; the Caster raises at the boundary
- Extensible: add_rule() returns a new Caster with the rule taking precedence
- Unknown markers pass values through unchanged
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any

from schemata.core.errors import AppError, Ok, Result, invalid_date, raise_result
from schemata.core.logging import cast_logger

log = cast_logger()


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


@dataclass(frozen=True, slots=True)
class CastRule(ABC):
    """Base class for cast rules.

    Each rule defines:
    - The type markers it handles
    - The cast itself, returning a Result
    """

    @property
    @abstractmethod
    def target_types(self) -> tuple[type, ...]:
        """Markers this rule casts to."""

    @abstractmethod
    def cast(self, value: Any, target: type) -> Result[Any, AppError]:
        """Cast value to target. Returns Result."""

    def __call__(self, value: Any, target: type) -> Result[Any, AppError]:
        return self.cast(value, target)


@dataclass(frozen=True, slots=True)
class BooleanCast(CastRule):
    """Anything but the falsey spellings is True."""
    falsey: tuple[Any, ...] = (False, 0, "0", "false", "off", "no")

    @property
    def target_types(self) -> tuple[type, ...]:
        return (bool,)

    def cast(self, value: Any, target: type) -> Result[bool | None, AppError]:
        if _is_empty(value):
            return Ok(None)
        return Ok(value not in self.falsey)


@dataclass(frozen=True, slots=True)
class NumberCast(CastRule):
    """Numeric strings are parsed; anything unparseable becomes nan."""

    @property
    def target_types(self) -> tuple[type, ...]:
        return (int, float)

    def cast(self, value: Any, target: type) -> Result[int | float | None, AppError]:
        if _is_empty(value):
            return Ok(None)
        if isinstance(value, bool):
            return Ok(target(value))
        if isinstance(value, (int, float)):
            return Ok(value)
        try:
            number = float(value.strip() if isinstance(value, str) else value)
        except (TypeError, ValueError):
            log.debug("cast_number_unparseable", value_type=type(value).__name__)
            return Ok(math.nan)
        if target is int and number.is_integer():
            return Ok(int(number))
        return Ok(number)


@dataclass(frozen=True, slots=True)
class StringCast(CastRule):

    @property
    def target_types(self) -> tuple[type, ...]:
        return (str,)

    def cast(self, value: Any, target: type) -> Result[str | None, AppError]:
        if _is_empty(value):
            return Ok(None)
        return Ok(str(value))


@dataclass(frozen=True, slots=True)
class ObjectCast(CastRule):
    """None is an acceptable object value; other non-mappings become {}."""

    @property
    def target_types(self) -> tuple[type, ...]:
        return (dict,)

    def cast(self, value: Any, target: type) -> Result[Any, AppError]:
        if value is None or isinstance(value, Mapping):
            return Ok(value)
        return Ok({})


@dataclass(frozen=True, slots=True)
class DateCast(CastRule):
    """ISO 8601 strings are parsed; numbers are epoch milliseconds (UTC)."""

    @property
    def target_types(self) -> tuple[type, ...]:
        return (datetime,)

    def _parse(self, value: str) -> datetime:
        """Parse ISO8601 string handling Z suffix."""
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))

    def cast(self, value: Any, target: type) -> Result[datetime | None, AppError]:
        if _is_empty(value):
            return Ok(None)
        if isinstance(value, datetime):
            return Ok(value)
        if isinstance(value, date):
            return Ok(datetime(value.year, value.month, value.day))
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                return Ok(datetime.fromtimestamp(value / 1000, tz=timezone.utc))
            except (OverflowError, OSError, ValueError):
                return invalid_date(value)
        if isinstance(value, str):
            try:
                return Ok(self._parse(value))
            except ValueError:
                return invalid_date(value)
        return invalid_date(value)


@dataclass(frozen=True, slots=True)
class ArrayCast(CastRule):

    @property
    def target_types(self) -> tuple[type, ...]:
        return (list,)

    def cast(self, value: Any, target: type) -> Result[list, AppError]:
        if _is_empty(value):
            return Ok([])
        if isinstance(value, list):
            return Ok(value)
        if isinstance(value, tuple):
            return Ok(list(value))
        return Ok([value])


@dataclass(frozen=True, slots=True)
class Caster:
    """Casts values to primitive type markers.

    Usage:
        caster = Caster()
        caster.cast("245", float)       # Ok(245.0)
        caster.cast("nope", datetime)   # Err(AppError)
    """
    rules: tuple[CastRule, ...] = field(default_factory=lambda: (
        BooleanCast(),
        NumberCast(),
        StringCast(),
        ObjectCast(),
        DateCast(),
        ArrayCast(),
    ))

    def add_rule(self, rule: CastRule) -> Caster:
        """Add a cast rule, returning new instance."""
        return Caster(rules=(rule, *self.rules))

    def rule_for(self, target: Any) -> CastRule | None:
        # Identity match: bool must not pick up the int rule
        for rule in self.rules:
            if any(target is t for t in rule.target_types):
                return rule
        return None

    def cast(self, value: Any, target: Any, key: str | None = None) -> Result[Any, AppError]:
        """Attempt to cast value to the target marker."""
        rule = self.rule_for(target)
        if rule is None:
            return Ok(value)
        result = rule.cast(value, target)
        if result.is_err() and key is not None:
            return result.map_err(lambda e: e.with_context(property_path=key))
        return result

    def cast_or_raise(self, value: Any, target: Any, key: str | None = None) -> Any:
        """Cast value, raising CastError on failure."""
        result = self.cast(value, target, key)
        raise_result(result)
        return result.unwrap()


# Default caster instance
DEFAULT_CASTER = Caster()


def cast_value(value: Any, target: Any, key: str | None = None) -> Any:
    """Convenience function using the default caster."""
    return DEFAULT_CASTER.cast_or_raise(value, target, key)
