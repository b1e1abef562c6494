"""bind-manager - A CLI tool to manage BIND blacklisted zones."""

__version__ = "0.1.0"
__author__ = "TheFinnaCompany Ltd"
__description__ = "A CLI tool to manage BIND blacklisted zones."

from bind_manager.core.registry import DomainRegistry

__all__ = ["DomainRegistry", "__version__"]
