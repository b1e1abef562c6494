"""Exceptions raised by bind-manager."""


class BindManagerError(Exception):
    """Base class for bind-manager errors."""


class ConfigError(BindManagerError):
    """Configuration file could not be used."""


class LockError(BindManagerError):
    """The exclusive lock could not be acquired."""


class TransactionError(BindManagerError):
    """A multi-file commit stopped halfway; the stores may have diverged."""

    def __init__(self, message: str, committed=None, pending=None):
        super().__init__(message)
        self.committed = list(committed or [])
        self.pending = list(pending or [])
