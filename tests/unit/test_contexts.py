from __future__ import annotations

import asyncio

import pytest

from jsonkit.accessors import extract_field_as, extract_field_in, find_field_in
from jsonkit.context import ASYNC, RAISING, RESULT
from jsonkit.errors import FieldNotFound, IoFailure, ShapeMismatch
from jsonkit.types import Err, Ok, Some


def _failing_acquire() -> str:
    raise IoFailure("open", "nowhere")


def test_raising_bracket_releases_after_failure() -> None:
    released: list[str] = []

    def use(handle: str) -> str:
        raise FieldNotFound("x")

    with pytest.raises(FieldNotFound):
        RAISING.bracket(lambda: "handle", use, released.append)

    assert released == ["handle"]


def test_bracket_skips_release_when_acquire_fails() -> None:
    released: list[str] = []

    with pytest.raises(IoFailure):
        RAISING.bracket(_failing_acquire, lambda handle: handle, released.append)
    outcome = RESULT.bracket(_failing_acquire, lambda handle: Ok(handle), released.append)

    assert isinstance(outcome, Err)
    assert released == []


def test_result_bracket_releases_for_ok_and_err() -> None:
    released: list[str] = []

    ok = RESULT.bracket(lambda: "a", lambda handle: Ok(handle.upper()), released.append)
    err = RESULT.bracket(lambda: "b", lambda handle: Err(FieldNotFound(handle)), released.append)
    raised = RESULT.bracket(lambda: "c", lambda handle: RAISING.fail(FieldNotFound(handle)), released.append)

    assert ok == Ok("A")
    assert isinstance(err, Err)
    assert isinstance(raised, Err)
    assert released == ["a", "b", "c"]


def test_result_context_from_option_and_result() -> None:
    assert RESULT.from_option(Some(None), FieldNotFound("x")) == Ok(None)
    assert isinstance(RESULT.from_option(None, FieldNotFound("x")), Err)
    assert RAISING.from_result(Ok(3)) == 3
    with pytest.raises(FieldNotFound):
        RAISING.from_result(Err(FieldNotFound("x")))


def test_async_context_runs_accessors() -> None:
    async def scenario():
        found = await find_field_in({"a": 1}, "a", ASYNC)
        decoded = await extract_field_as({"n": 5}, "n", int, ASYNC)
        return found, decoded

    assert asyncio.run(scenario()) == (Some(1), 5)


def test_async_context_raises_typed_failures() -> None:
    with pytest.raises(FieldNotFound):
        asyncio.run(extract_field_in({"a": 1}, "b", ASYNC))
    with pytest.raises(ShapeMismatch):
        asyncio.run(extract_field_in([], "b", ASYNC))


def test_async_bracket_releases_on_failure() -> None:
    released: list[str] = []

    async def use(handle: str) -> str:
        raise FieldNotFound(handle)

    with pytest.raises(FieldNotFound):
        asyncio.run(ASYNC.bracket(lambda: "handle", use, released.append))

    assert released == ["handle"]


def test_async_bracket_releases_on_cancellation() -> None:
    released: list[str] = []

    async def scenario() -> None:
        started = asyncio.Event()

        async def hang(handle: str) -> None:
            started.set()
            await asyncio.sleep(3600)

        task = asyncio.create_task(ASYNC.bracket(lambda: "handle", hang, released.append))
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())

    assert released == ["handle"]
