"""Staged two-phase writes across several files."""
import os
import time
from typing import Dict, List

from bind_manager.core.exceptions import TransactionError
from bind_manager.core.logger import logger
from bind_manager.repositories.file_utils import atomic_write_json, remove_quietly, shadow_path, write_file


class StoreTransaction:
    """Stage new contents for several files and commit them together.

    Every staged file is first written to a shadow file. Only when all
    shadows are on disk are they renamed over their targets. If a rename
    fails after an earlier one succeeded, an inconsistency marker is left
    at ``marker_path`` for manual reconciliation.
    """

    def __init__(self, marker_path: str):
        self._marker_path = marker_path
        self._staged: Dict[str, str] = {}

    @property
    def marker_path(self) -> str:
        return self._marker_path

    @property
    def staged(self) -> List[str]:
        return list(self._staged)

    def stage(self, path: str, content: str) -> None:
        """Stage the full new content of ``path``. Restaging replaces it."""
        self._staged[path] = content

    def commit(self) -> List[str]:
        """Write all staged files.

        Returns:
            The paths that were replaced, in staging order.

        Raises:
            OSError: A shadow could not be written; no target was touched.
            TransactionError: Some targets were replaced and others were not.
        """
        if not self._staged:
            return []

        shadows = []
        try:
            for path, content in self._staged.items():
                shadow = shadow_path(path)
                shadows.append(shadow)
                write_file(shadow, content, like=path)
        except OSError as e:
            logger.error(f"Staging failed, nothing committed: {e}")
            for shadow in shadows:
                remove_quietly(shadow)
            raise

        paths = list(self._staged)
        committed: List[str] = []
        for index, path in enumerate(paths):
            try:
                os.replace(shadow_path(path), path)
            except OSError as e:
                pending = paths[index:]
                for leftover in pending:
                    remove_quietly(shadow_path(leftover))
                if not committed:
                    raise
                self._write_marker(committed, pending, e)
                raise TransactionError(
                    f"Partial commit: {', '.join(committed)} updated but {', '.join(pending)} not",
                    committed=committed,
                    pending=pending,
                ) from e
            committed.append(path)
            logger.debug(f"Committed {path}")

        self._staged.clear()
        return committed

    def _write_marker(self, committed: List[str], pending: List[str], error: Exception) -> None:
        logger.error(f"Stores diverged; writing inconsistency marker {self._marker_path}")
        try:
            atomic_write_json(
                self._marker_path,
                {
                    "time": time.strftime("%Y-%m-%dT%H:%M:%S"),
                    "committed": committed,
                    "pending": pending,
                    "error": str(error),
                },
            )
        except OSError as e:
            logger.error(f"Could not write inconsistency marker: {e}")
