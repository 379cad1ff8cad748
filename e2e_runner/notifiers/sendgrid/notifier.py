"""SendGrid notifier implementation."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp
from pydantic import ValidationError

from e2e_runner.notifiers.base import Notification, Notifier
from e2e_runner.notifiers.sendgrid.config import SendGridConfig
from e2e_runner.notifiers.sendgrid.models import SendGridErrorResponse

log = logging.getLogger(__name__)

MAIL_SEND_PATH = "/v3/mail/send"


@dataclass(frozen=True, kw_only=True)
class SendGridNotifier(Notifier):
    """Sends notifications as HTML e-mail through the SendGrid v3 API."""

    config: SendGridConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: SendGridConfig
    ) -> AsyncGenerator["SendGridNotifier", None]:
        """Create notifier with managed session lifecycle."""
        headers = {
            "Authorization": f"Bearer {config.api_key.get_secret_value()}",
            "Content-Type": "application/json",
        }
        async with aiohttp.ClientSession(
            base_url=config.api_base_url,
            headers=headers,
        ) as session:
            yield cls(config=config, session=session)

    def build_payload(self, notification: Notification) -> dict[str, Any]:
        """Build the mail send request body."""
        return {
            "personalizations": [
                {"to": [{"email": address} for address in self.config.to]}
            ],
            "from": {
                "email": self.config.from_address,
                "name": self.config.from_name,
            },
            "subject": notification.subject,
            "content": [{"type": "text/html", "value": notification.html_body}],
            "categories": [self.config.category],
            "tracking_settings": {
                "click_tracking": {"enable": True, "enable_text": False},
                "open_tracking": {"enable": True},
            },
        }

    async def send(self, notification: Notification) -> None:
        """Send the notification to all configured recipients."""
        log.info(
            "Sending email from: %s, to: %s, subject: %s",
            self.config.from_address,
            ",".join(self.config.to),
            notification.subject,
        )

        payload = self.build_payload(notification)
        async with self.session.post(MAIL_SEND_PATH, json=payload) as response:
            if response.status in (200, 202):
                return
            text = await response.text()

        raise RuntimeError(
            f"Failed to send email: {response.status} {_error_details(text)}"
        )


def _error_details(text: str) -> str:
    try:
        errors = SendGridErrorResponse.model_validate_json(text).errors
    except ValidationError:
        return text
    return "; ".join(error.message for error in errors) or text
