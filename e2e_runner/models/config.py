"""Runner configuration."""

from datetime import timedelta

from pydantic import Field

from e2e_runner.models.base import Model


class RunnerConfig(Model):
    """Settings for the run loop, resolved once at startup."""

    runs: int = Field(default=0, ge=0, description="Number of runs, 0 runs forever")
    test_timeout: int = Field(
        default=600, gt=0, description="Seconds to wait for a single test"
    )
    run_delay: int = Field(
        default=3600, ge=0, description="Seconds to sleep between two runs"
    )
    silence_hours: int = Field(
        default=12, ge=0, description="Hours to silence duplicate failure alerts"
    )
    single_test: str | None = Field(
        default=None, description="Run only this test instead of the allow-list"
    )
    send_notifications: bool = Field(
        default=True, description="Send a notification when tests fail"
    )
    concurrent: bool = Field(default=False, description="Run tests concurrently")
    target_url: str | None = Field(
        default=None, description="Base URL of the service under test"
    )

    @property
    def forever(self) -> bool:
        """Whether the run loop is unbounded."""
        return self.runs == 0

    @property
    def silence_window(self) -> timedelta:
        """Minimum time between two alerts for the same test."""
        return timedelta(hours=self.silence_hours)
