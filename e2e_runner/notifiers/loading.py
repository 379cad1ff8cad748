"""Notifier plugins registered under the ``e2e_runner.notifiers`` entry point group."""

from collections.abc import Mapping
from importlib.metadata import EntryPoint, entry_points
from typing import Any

from e2e_runner.notifiers.manifest import NotifierManifest

ENTRY_POINT_GROUP = "e2e_runner.notifiers"


class NotifierNotFoundError(LookupError):
    """No notifier is installed under the requested key."""


def available_notifiers() -> Mapping[str, EntryPoint]:
    """Return installed notifier entry points keyed by name, sorted."""
    installed = {entry.name: entry for entry in entry_points(group=ENTRY_POINT_GROUP)}
    return dict(sorted(installed.items()))


def load_notifier_manifest(key: str) -> NotifierManifest[Any]:
    """Import the manifest a notifier key points at.

    Only the selected notifier's module is imported.

    Raises:
        NotifierNotFoundError: If no notifier is installed under ``key``
        TypeError: If the entry point does not reference a NotifierManifest

    """
    installed = available_notifiers()
    if key not in installed:
        raise NotifierNotFoundError(
            f"Notifier '{key}' not found. Available notifiers: {list(installed)}"
        )

    entry = installed[key]
    manifest = entry.load()
    if not isinstance(manifest, NotifierManifest):
        raise TypeError(
            f"Entry point {entry.value!r} for notifier '{key}' "
            f"is not a NotifierManifest"
        )
    return manifest
