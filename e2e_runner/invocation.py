"""Invoke a single test body with a bounded wait."""

import asyncio
import logging
from contextvars import ContextVar

from e2e_runner.models.result import RunResult
from e2e_runner.registry import TestCase

log = logging.getLogger(__name__)

_abandon_event: ContextVar[asyncio.Event | None] = ContextVar(
    "e2e_runner_abandon_event", default=None
)


def abandoned() -> bool:
    """Return True once the runner has stopped waiting for the current test.

    Test bodies may poll this between steps and return early. The runner never
    cancels a timed-out test, so bodies that ignore it keep running detached.
    """
    event = _abandon_event.get()
    return event is not None and event.is_set()


async def invoke_with_timeout(
    test_case: TestCase,
    timeout: float,
    *,
    background: set[asyncio.Task[object]],
) -> RunResult:
    """Run a test and race it against ``timeout`` seconds.

    Args:
        test_case: Test to invoke
        timeout: Seconds to wait before giving up on the test
        background: Set that keeps abandoned tasks referenced until they settle

    Returns:
        Result of the test; a test still running at the deadline is reported
        as ``timeout`` and left running in ``background``

    """
    loop = asyncio.get_running_loop()
    started = loop.time()

    abandon = asyncio.Event()
    token = _abandon_event.set(abandon)
    try:
        # The task copies the current context, so the body sees its own event
        task: asyncio.Task[object] = asyncio.create_task(
            _call(test_case), name=f"e2e:{test_case.name}"
        )
    finally:
        _abandon_event.reset(token)

    done, _ = await asyncio.wait({task}, timeout=timeout)
    duration = loop.time() - started

    if task not in done:
        abandon.set()
        background.add(task)
        task.add_done_callback(background.discard)
        task.add_done_callback(_log_late_outcome)

        message = f"{test_case.name} has not finished within {timeout:g} secs. Moved on."
        log.warning("%s", message)
        return RunResult(
            test_name=test_case.name,
            status="timeout",
            duration=duration,
            message=message,
            error=TimeoutError(message),
        )

    error: BaseException | None
    if task.cancelled():
        error = asyncio.CancelledError(f"{test_case.name} was cancelled")
    else:
        error = task.exception()

    if error is not None:
        log.error(
            "%s failed after %.1f secs: %s",
            test_case.name,
            duration,
            error,
            exc_info=error,
        )
        return RunResult(
            test_name=test_case.name,
            status="failed",
            duration=duration,
            message=str(error) or type(error).__name__,
            error=error,
        )

    log.info("%s finished within %.1f secs", test_case.name, duration)
    return RunResult(test_name=test_case.name, status="passed", duration=duration)


async def _call(test_case: TestCase) -> object:
    return await test_case.invoke()


def _log_late_outcome(task: asyncio.Task[object]) -> None:
    if task.cancelled():
        log.debug("Abandoned task %s was cancelled", task.get_name())
    elif (error := task.exception()) is not None:
        log.debug("Abandoned task %s failed late: %s", task.get_name(), error)
    else:
        log.debug("Abandoned task %s finished late", task.get_name())
