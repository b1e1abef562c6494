"""Core functionality for bind-manager."""

from bind_manager.core.config import Config
from bind_manager.core.registry import DomainRegistry

__all__ = ["Config", "DomainRegistry"]
