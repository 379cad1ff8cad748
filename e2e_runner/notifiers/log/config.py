"""Configuration for the log notifier."""

from typing import Literal

from pydantic import BaseModel


class LogNotifierConfig(BaseModel):
    """Configuration for the log notifier."""

    level: Literal["info", "warning", "error"] = "warning"
    logger: str = "e2e_runner.notifications"
