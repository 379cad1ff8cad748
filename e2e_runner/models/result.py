"""Models for test execution results."""

from dataclasses import dataclass, field
from typing import Literal

type RunStatus = Literal["passed", "failed", "timeout"]


@dataclass(frozen=True, kw_only=True)
class RunResult:
    """Outcome of invoking a single end-to-end test.

    ``error`` holds the exception raised by the test body, or a
    ``TimeoutError`` describing the abandoned wait for timed-out tests.
    """

    test_name: str
    status: RunStatus
    duration: float
    message: str | None = None
    error: BaseException | None = field(default=None, compare=False, repr=False)

    @property
    def passed(self) -> bool:
        """Whether the test finished successfully within its timeout."""
        return self.status == "passed"
