"""Notifier manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from pydantic import BaseModel

from e2e_runner.notifiers.base import Notifier


@dataclass(frozen=True, kw_only=True)
class NotifierManifest[ConfigT: BaseModel]:
    """Manifest describing a notifier plugin.

    The manifest references the configuration class and the notifier factory
    so notifiers are only loaded when selected by key.
    """

    config_cls: type[ConfigT]
    notifier_factory: Callable[[ConfigT], AbstractAsyncContextManager[Notifier]]
