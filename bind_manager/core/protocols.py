"""Protocols for type-safe dependency injection."""
from typing import Protocol

from bind_manager.core.types import ReloadResult


class Reloader(Protocol):
    """Protocol for the resolver reload capability."""

    def reload(self) -> ReloadResult:
        """Apply the current zones. Must not raise."""
        ...
