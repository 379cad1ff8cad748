"""Log notifier manifest."""

from e2e_runner.notifiers.log.config import LogNotifierConfig
from e2e_runner.notifiers.log.notifier import LogNotifier
from e2e_runner.notifiers.manifest import NotifierManifest

log_manifest = NotifierManifest(
    config_cls=LogNotifierConfig,
    notifier_factory=LogNotifier.from_config,
)
