"""Unit tests for Mutation."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from conduit_client.errors import TransportError, ValidationFailed
from conduit_client.mutations import Mutation

from fixtures.logs import logged_events


@pytest.mark.asyncio
async def test_success_runs_effects_in_order():
    order = []
    call = AsyncMock(return_value="result")
    mutation = Mutation(
        "save",
        call,
        on_success=[lambda r: order.append(("first", r))],
    ).then(lambda r: order.append(("second", r)))

    assert await mutation.invoke(1, key="k") == "result"

    call.assert_awaited_once_with(1, key="k")
    assert order == [("first", "result"), ("second", "result")]
    assert mutation.submitting.value is False


@pytest.mark.asyncio
async def test_submitting_is_true_only_while_in_flight():
    gate = asyncio.Event()
    states = []

    async def call():
        await gate.wait()
        return "done"

    mutation = Mutation("slow", call)
    mutation.submitting.subscribe(states.append, replay=False)
    task = asyncio.create_task(mutation.invoke())
    await asyncio.sleep(0)
    assert mutation.in_flight is True

    gate.set()
    await task

    assert states == [True, False]


@pytest.mark.asyncio
async def test_invocation_while_in_flight_is_ignored(mock_logger):
    gate = asyncio.Event()
    calls = []

    async def call(n):
        calls.append(n)
        await gate.wait()
        return n

    mutation = Mutation("favorite", call, logger=mock_logger)
    first = asyncio.create_task(mutation.invoke(1))
    await asyncio.sleep(0)

    assert await mutation.invoke(2) is None

    gate.set()
    assert await first == 1
    assert calls == [1]
    assert "mutation_ignored_in_flight" in logged_events(mock_logger, "debug")


@pytest.mark.asyncio
async def test_failed_precondition_skips_call():
    call = AsyncMock()
    mutation = Mutation("follow", call, precondition=lambda: False)

    assert await mutation.invoke("jake") is None

    call.assert_not_awaited()
    assert mutation.submitting.value is False


@pytest.mark.asyncio
async def test_validation_failure_populates_errors_and_skips_effects():
    effect = MagicMock()
    errors = {"email": ["is invalid"]}
    mutation = Mutation("login", AsyncMock(side_effect=ValidationFailed(422, errors)), on_success=[effect])

    with pytest.raises(ValidationFailed):
        await mutation.invoke("a", "b")

    assert mutation.errors.value == errors
    assert mutation.submitting.value is False
    effect.assert_not_called()


@pytest.mark.asyncio
async def test_errors_cleared_on_next_submission():
    call = AsyncMock(side_effect=[ValidationFailed(422, {"body": ["can't be blank"]}), "ok"])
    mutation = Mutation("comment", call)
    with pytest.raises(ValidationFailed):
        await mutation.invoke()

    assert await mutation.invoke() == "ok"
    assert mutation.errors.value is None
    assert mutation.last_error is None


@pytest.mark.asyncio
async def test_other_failures_propagate_without_retry(mock_logger):
    call = AsyncMock(side_effect=TransportError("down"))
    mutation = Mutation("delete", call, logger=mock_logger)

    with pytest.raises(TransportError):
        await mutation.invoke()

    assert call.await_count == 1
    assert mutation.errors.value is None
    assert isinstance(mutation.last_error, TransportError)
    assert "mutation_failed" in logged_events(mock_logger, "warning")


@pytest.mark.asyncio
async def test_guard_released_after_failure():
    call = AsyncMock(side_effect=[TransportError("down"), "ok"])
    mutation = Mutation("retry_by_user", call)
    with pytest.raises(TransportError):
        await mutation.invoke()
    assert await mutation.invoke() == "ok"
