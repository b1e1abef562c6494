"""Services Package - collaborators with side effects outside the stores."""
from bind_manager.services.reload_service import NullReloadService, ReloadService

__all__ = ["ReloadService", "NullReloadService"]
