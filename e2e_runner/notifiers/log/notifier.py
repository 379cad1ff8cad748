"""Notifier that writes notifications to the log."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from e2e_runner.notifiers.base import Notification, Notifier
from e2e_runner.notifiers.log.config import LogNotifierConfig

LEVELS = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass(frozen=True, kw_only=True)
class LogNotifier(Notifier):
    """Writes the subject and body of each notification to a logger."""

    config: LogNotifierConfig

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: LogNotifierConfig
    ) -> AsyncGenerator["LogNotifier", None]:
        """Create notifier; it holds no resources."""
        yield cls(config=config)

    async def send(self, notification: Notification) -> None:
        """Log the notification."""
        logging.getLogger(self.config.logger).log(
            LEVELS[self.config.level],
            "%s\n%s",
            notification.subject,
            notification.html_body,
        )
