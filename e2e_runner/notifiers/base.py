"""Abstract base class for failure notifiers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class Notification:
    """Summary of a run's escalated failures."""

    subject: str
    html_body: str


@dataclass(frozen=True, kw_only=True)
class Notifier(ABC):
    """Abstract base for notification sinks.

    Implementations deliver a notification or raise; retries and templating
    are up to the implementation.
    """

    @abstractmethod
    async def send(self, notification: Notification) -> None:
        """Deliver a notification.

        Args:
            notification: Subject and HTML body to deliver

        """
