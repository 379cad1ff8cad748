"""Run loop coordinating discovery, bounded invocation and alerting."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from e2e_runner.dedup import FailureNotificationCache, utcnow
from e2e_runner.formatting import (
    SEPARATOR,
    build_subject,
    format_failure_html,
    pretty_server_name,
)
from e2e_runner.invocation import invoke_with_timeout
from e2e_runner.models.config import RunnerConfig
from e2e_runner.models.result import RunResult
from e2e_runner.notifiers.base import Notification, Notifier
from e2e_runner.registry import TestCase, TestRegistry

log = logging.getLogger(__name__)

STATUS_SYMBOLS = {
    "passed": "✅",
    "failed": "❌",
    "timeout": "⏱️",
}


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Outcome of one full pass over the discovered tests."""

    run_number: int
    results: Sequence[RunResult]
    escalated: Sequence[str]
    duration: float

    @property
    def has_failures(self) -> bool:
        """Whether any test failed or timed out, escalated or not."""
        return any(not result.passed for result in self.results)

    @property
    def should_notify(self) -> bool:
        """Whether at least one failure was escalated in this run."""
        return bool(self.escalated)


@dataclass(kw_only=True)
class TestOrchestrator:
    """Runs the allow-listed tests in a loop and alerts on new failures."""

    __test__ = False

    registry: TestRegistry
    config: RunnerConfig
    allow_list: Sequence[str]
    cache: FailureNotificationCache
    notifier: Notifier | None = None
    clock: Callable[[], datetime] = utcnow
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    background: set[asyncio.Task[object]] = field(default_factory=set, repr=False)

    async def run(self) -> RunSummary | None:
        """Run the configured number of passes, or forever when runs is 0.

        Returns:
            Summary of the last run, or None if no run happened

        """
        summary: RunSummary | None = None
        run_number = 1

        while self.config.forever or run_number <= self.config.runs:
            summary = await self.run_once(run_number)
            log_run_summary(summary)
            await self.notify(summary)

            if not self.config.forever and run_number >= self.config.runs:
                break

            log.info(
                "Waiting %d seconds before run %d",
                self.config.run_delay,
                run_number + 1,
            )
            await self.sleep(self.config.run_delay)
            run_number += 1

        return summary

    def discover(self) -> Sequence[TestCase]:
        """Resolve the tests to run: the single-test override or the allow-list."""
        if self.config.single_test is not None:
            return self.registry.discover([self.config.single_test])
        return self.registry.discover(self.allow_list)

    async def run_once(self, run_number: int) -> RunSummary:
        """Run every discovered test once and collect escalated failures."""
        loop = asyncio.get_running_loop()
        started = loop.time()

        test_cases = self.discover()
        log.info(
            "Run %d: %d test(s) against %s (%s)",
            run_number,
            len(test_cases),
            pretty_server_name(self.config.target_url),
            "concurrently" if self.config.concurrent else "sequentially",
        )

        escalated: list[str] = []
        if self.config.concurrent:
            results: Sequence[RunResult] = await asyncio.gather(
                *(self._run_test(test_case, escalated) for test_case in test_cases)
            )
        else:
            results = [
                await self._run_test(test_case, escalated) for test_case in test_cases
            ]

        duration = loop.time() - started
        log.info("Run %d completed in %.1f seconds", run_number, duration)

        return RunSummary(
            run_number=run_number,
            results=results,
            escalated=escalated,
            duration=duration,
        )

    async def notify(self, summary: RunSummary) -> None:
        """Send one notification for the run's escalated failures, if any.

        Delivery errors are logged together with the message and never raised.
        """
        if not summary.should_notify:
            return

        if not self.config.send_notifications or self.notifier is None:
            log.info(
                "Notifications disabled, not reporting %d failure(s)",
                len(summary.escalated),
            )
            return

        notification = Notification(
            subject=build_subject(summary.run_number, self.config.runs),
            html_body=SEPARATOR.join(summary.escalated),
        )

        try:
            await self.notifier.send(notification)
        except Exception:
            log.exception("Encountered an error while sending notification")
            log.error(
                "Tried to send the following message:\n%s\n%s",
                notification.subject,
                notification.html_body,
            )

    async def _run_test(self, test_case: TestCase, escalated: list[str]) -> RunResult:
        log.info("%s started", test_case.name)
        result = await invoke_with_timeout(
            test_case, self.config.test_timeout, background=self.background
        )

        if not result.passed and self._escalate(result.test_name):
            escalated.append(
                format_failure_html(
                    result, target_url=self.config.target_url, at=self.clock()
                )
            )

        return result

    def _escalate(self, test_name: str) -> bool:
        if self.cache.should_escalate(test_name):
            return True
        log.info("Suppressing duplicate alert for %s", test_name)
        return False


def log_run_summary(summary: RunSummary) -> None:
    """Log a formatted summary of a run's results."""
    log.info("=" * 80)
    log.info("Run %d results:", summary.run_number)
    log.info("=" * 80)

    for result in summary.results:
        symbol = STATUS_SYMBOLS.get(result.status, "?")
        log.info(
            "%s %s: %s (%.2fs)",
            symbol,
            result.test_name,
            result.status,
            result.duration,
        )
        if result.message:
            log.info("  Message: %s", result.message)

    log.info(
        "%d passed, %d failed, %d escalated",
        sum(1 for result in summary.results if result.passed),
        sum(1 for result in summary.results if not result.passed),
        len(summary.escalated),
    )
