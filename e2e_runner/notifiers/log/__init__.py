"""Log notifier module."""

from e2e_runner.notifiers.log.config import LogNotifierConfig
from e2e_runner.notifiers.log.manifest import log_manifest
from e2e_runner.notifiers.log.notifier import LogNotifier

__all__ = ["LogNotifier", "LogNotifierConfig", "log_manifest"]
