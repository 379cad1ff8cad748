"""SendGrid notifier manifest."""

from e2e_runner.notifiers.manifest import NotifierManifest
from e2e_runner.notifiers.sendgrid.config import SendGridConfig
from e2e_runner.notifiers.sendgrid.notifier import SendGridNotifier

sendgrid_manifest = NotifierManifest(
    config_cls=SendGridConfig,
    notifier_factory=SendGridNotifier.from_config,
)
