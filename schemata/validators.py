"""Validator Variants

Validators are user functions attached to a property. Their calling
convention is decided once, when the schema is built, from the number of
positional parameters they declare:

    3  (key, name, entity)                     direct
    4  (key, name, entity, callback)            callback
    5  (key, name, entity, parent, callback)    callback with parent

Parameters with default values are not counted. A direct validator may also
be a coroutine function or return any awaitable. Callback validators report
through callback(error, invalid), where a non-None error is a hard failure
and invalid is the (possibly falsy) validation result.

Every variant exposes the same coroutine, run(), so the engine never has to
know which convention a validator uses.
"""
from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Union

from schemata.core.errors import raise_error, unsupported_validator
from schemata.core.logging import validation_logger

log = validation_logger()


class CallbackError(Exception):
    """A validator called back with a non-exception error value."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(str(value))


def _describe(fn: Callable) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


async def _call_with_callback(fn: Callable, *args: Any) -> Any:
    """Call a callback-style validator and wait for its first callback."""
    loop = asyncio.get_running_loop()
    future: asyncio.Future = loop.create_future()

    def settle(error: Any, invalid: Any) -> None:
        if future.done():
            log.warning("validator_callback_repeated", validator=_describe(fn))
            return
        if error is not None:
            future.set_exception(error if isinstance(error, BaseException) else CallbackError(error))
        else:
            future.set_result(invalid)

    def callback(error: Any = None, invalid: Any = None) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            settle(error, invalid)
        else:
            # Called back from another thread
            loop.call_soon_threadsafe(settle, error, invalid)

    await _maybe_await(fn(*args, callback))
    return await future


@dataclass(frozen=True, slots=True)
class Direct:
    """(key, name, entity) -> invalid, or an awaitable of it."""
    fn: Callable[..., Any]
    arity: ClassVar[int] = 3

    async def run(self, key: str, name: str, entity: Any, parent: Any) -> Any:
        return await _maybe_await(self.fn(key, name, entity))


@dataclass(frozen=True, slots=True)
class Callback:
    """(key, name, entity, callback) reporting through callback(error, invalid)."""
    fn: Callable[..., Any]
    arity: ClassVar[int] = 4

    async def run(self, key: str, name: str, entity: Any, parent: Any) -> Any:
        return await _call_with_callback(self.fn, key, name, entity)


@dataclass(frozen=True, slots=True)
class CallbackWithParent:
    """(key, name, entity, parent, callback), also given the top-level entity."""
    fn: Callable[..., Any]
    arity: ClassVar[int] = 5

    async def run(self, key: str, name: str, entity: Any, parent: Any) -> Any:
        return await _call_with_callback(self.fn, key, name, entity, parent)


Validator = Union[Direct, Callback, CallbackWithParent]

_VARIANTS: dict[int, type] = {
    Direct.arity: Direct,
    Callback.arity: Callback,
    CallbackWithParent.arity: CallbackWithParent,
}

# Explicit constructors, usable as decorators
direct = Direct
callback = Callback
callback_with_parent = CallbackWithParent


def required_positional_count(fn: Callable) -> int | None:
    """Number of positional parameters without defaults, None if unknown."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return None
    return sum(
        1 for param in signature.parameters.values()
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD)
        and param.default is param.empty
    )


def as_validator(fn: Any, field: str | None = None) -> Validator:
    """Classify a validator by arity, raising SchemaDefinitionError if unsupported."""
    if isinstance(fn, (Direct, Callback, CallbackWithParent)):
        return fn
    if not callable(fn):
        raise_error(unsupported_validator(fn, None, field).error)

    arity = required_positional_count(fn)
    variant = _VARIANTS.get(arity) if arity is not None else None
    if variant is None:
        raise_error(unsupported_validator(fn, arity, field).error)
    return variant(fn)
