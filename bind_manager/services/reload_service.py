"""Resolver reload service."""
import shlex
from typing import List, Optional

from bind_manager.core.constants import RELOAD_COMMAND, RELOAD_TIMEOUT
from bind_manager.core.logger import logger
from bind_manager.core.types import ReloadResult
from bind_manager.utils.process_utils import ProcessUtils


class ReloadService:
    """Asks the running resolver to re-read its zones (``rndc reload``)."""

    def __init__(self, command: Optional[List[str]] = None, timeout: float = RELOAD_TIMEOUT):
        self._command = command or shlex.split(RELOAD_COMMAND)
        self._timeout = timeout

    @property
    def command(self) -> List[str]:
        return list(self._command)

    def reload(self) -> ReloadResult:
        """Run the reload command. Never raises.

        Returns:
            SUCCESS iff the command exited with status 0
        """
        logger.debug(f"Reloading resolver: {' '.join(self._command)}")
        result = ProcessUtils.run_command_sync(self._command, timeout=self._timeout)
        if result is None:
            return ReloadResult.FAILURE

        returncode, _, stderr = result
        if returncode != 0:
            logger.error(f"Reload exited with status {returncode}: {stderr.strip()}")
            return ReloadResult.FAILURE

        logger.info("Resolver reloaded")
        return ReloadResult.SUCCESS


class NullReloadService:
    """Stand-in that never touches the resolver."""

    def reload(self) -> ReloadResult:
        logger.debug("Reload skipped")
        return ReloadResult.SUCCESS
