"""SendGrid notifier module."""

from e2e_runner.notifiers.sendgrid.config import SendGridConfig
from e2e_runner.notifiers.sendgrid.manifest import sendgrid_manifest
from e2e_runner.notifiers.sendgrid.notifier import SendGridNotifier

__all__ = ["SendGridConfig", "SendGridNotifier", "sendgrid_manifest"]
