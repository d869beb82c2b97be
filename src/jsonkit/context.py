"""Computation contexts that every accessor, decoder and loader is written against.

A context decides how a value or a failure is carried:

- ``RAISING``: direct style, failures raise the ``DecodeError``.
- ``RESULT``: failures come back as ``Err`` values, successes as ``Ok``.
- ``ASYNC``: every operation returns an awaitable; blocking I/O runs in a
  worker thread.

``bracket`` is the scoped-acquisition primitive. ``release`` runs exactly once
for every successful ``acquire`` whatever happens afterwards.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Protocol, TypeVar

from jsonkit.errors import DecodeError
from jsonkit.types import Err, Ok, Option, Result

logger = logging.getLogger(__name__)

A = TypeVar("A")
R = TypeVar("R")


class Context(Protocol):
    def pure(self, value: Any) -> Any: ...

    def fail(self, error: DecodeError) -> Any: ...

    def from_option(self, option: Option[Any], error: DecodeError) -> Any: ...

    def from_result(self, result: Result[Any]) -> Any: ...

    def attempt(self, thunk: Callable[[], Any]) -> Any: ...

    def blocking(self, thunk: Callable[[], Any]) -> Any: ...

    def map(self, fa: Any, fn: Callable[[Any], Any]) -> Any: ...

    def and_then(self, fa: Any, fn: Callable[[Any], Any]) -> Any: ...

    def bracket(
        self,
        acquire: Callable[[], R],
        use: Callable[[R], Any],
        release: Callable[[R], None],
    ) -> Any: ...


class RaisingContext:
    """Plain values in, plain values out; failures raise."""

    def pure(self, value: A) -> A:
        return value

    def fail(self, error: DecodeError) -> Any:
        raise error

    def from_option(self, option: Option[A], error: DecodeError) -> A:
        if option is None:
            raise error
        return option.value

    def from_result(self, result: Result[A]) -> A:
        return result.unwrap()

    def attempt(self, thunk: Callable[[], A]) -> A:
        return thunk()

    def blocking(self, thunk: Callable[[], A]) -> A:
        return thunk()

    def map(self, fa: A, fn: Callable[[A], Any]) -> Any:
        return fn(fa)

    def and_then(self, fa: A, fn: Callable[[A], Any]) -> Any:
        return fn(fa)

    def bracket(
        self,
        acquire: Callable[[], R],
        use: Callable[[R], Any],
        release: Callable[[R], None],
    ) -> Any:
        resource = acquire()
        try:
            return use(resource)
        finally:
            release(resource)

    def __repr__(self) -> str:
        return "RAISING"


class ResultContext:
    """Carries outcomes as ``Ok``/``Err``. Non-``DecodeError`` exceptions still raise."""

    def pure(self, value: A) -> Ok[A]:
        return Ok(value)

    def fail(self, error: DecodeError) -> Err:
        return Err(error)

    def from_option(self, option: Option[A], error: DecodeError) -> Result[A]:
        if option is None:
            return Err(error)
        return Ok(option.value)

    def from_result(self, result: Result[A]) -> Result[A]:
        return result

    def attempt(self, thunk: Callable[[], A]) -> Result[A]:
        try:
            return Ok(thunk())
        except DecodeError as exc:
            return Err(exc)

    def blocking(self, thunk: Callable[[], A]) -> Result[A]:
        return self.attempt(thunk)

    def map(self, fa: Result[A], fn: Callable[[A], Any]) -> Result[Any]:
        return fa.map(fn)

    def and_then(self, fa: Result[A], fn: Callable[[A], Result[Any]]) -> Result[Any]:
        return fa.and_then(fn)

    def bracket(
        self,
        acquire: Callable[[], R],
        use: Callable[[R], Result[Any]],
        release: Callable[[R], None],
    ) -> Result[Any]:
        acquired = self.attempt(acquire)
        if isinstance(acquired, Err):
            return acquired
        resource = acquired.value
        try:
            return use(resource)
        except DecodeError as exc:
            return Err(exc)
        finally:
            release(resource)

    def __repr__(self) -> str:
        return "RESULT"


async def _value(value: A) -> A:
    return value


async def _raise(error: DecodeError) -> Any:
    raise error


def _release_when_done(release: Callable[[Any], None]) -> Callable[[asyncio.Future[Any]], None]:
    def callback(future: asyncio.Future[Any]) -> None:
        if future.cancelled() or future.exception() is not None:
            return
        logger.debug("Releasing resource acquired after cancellation")
        release(future.result())

    return callback


class AsyncContext:
    """Every operation returns an awaitable; blocking steps run via ``asyncio.to_thread``."""

    def pure(self, value: A) -> Awaitable[A]:
        return _value(value)

    def fail(self, error: DecodeError) -> Awaitable[Any]:
        return _raise(error)

    def from_option(self, option: Option[A], error: DecodeError) -> Awaitable[A]:
        if option is None:
            return _raise(error)
        return _value(option.value)

    def from_result(self, result: Result[A]) -> Awaitable[A]:
        if isinstance(result, Err):
            return _raise(result.error)
        return _value(result.value)

    def attempt(self, thunk: Callable[[], A]) -> Awaitable[A]:
        async def attempted() -> A:
            return thunk()

        return attempted()

    def blocking(self, thunk: Callable[[], A]) -> Awaitable[A]:
        return asyncio.to_thread(thunk)

    def map(self, fa: Awaitable[A], fn: Callable[[A], Any]) -> Awaitable[Any]:
        async def mapped() -> Any:
            return fn(await fa)

        return mapped()

    def and_then(self, fa: Awaitable[A], fn: Callable[[A], Awaitable[Any]]) -> Awaitable[Any]:
        async def chained() -> Any:
            return await fn(await fa)

        return chained()

    def bracket(
        self,
        acquire: Callable[[], R],
        use: Callable[[R], Awaitable[Any]],
        release: Callable[[R], None],
    ) -> Awaitable[Any]:
        async def scoped() -> Any:
            pending = asyncio.ensure_future(asyncio.to_thread(acquire))
            try:
                resource = await asyncio.shield(pending)
            except asyncio.CancelledError:
                # acquire keeps running in its thread; release whatever it yields
                pending.add_done_callback(_release_when_done(release))
                raise
            try:
                return await use(resource)
            finally:
                release(resource)

        return scoped()

    def __repr__(self) -> str:
        return "ASYNC"


RAISING = RaisingContext()
RESULT = ResultContext()
ASYNC = AsyncContext()
