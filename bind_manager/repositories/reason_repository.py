"""Reason Repository - JSON-backed storage for blacklisting reasons."""
import json
import os
import shutil
from datetime import datetime
from typing import List, Optional, Tuple

from bind_manager.core.constants import CORRUPT_SUFFIX, REASON_LOG_PATH
from bind_manager.core.logger import logger
from bind_manager.core.types import DomainEntry, LoadStatus
from bind_manager.repositories.file_utils import atomic_write, load_json_file


class ReasonRepository:
    """Thin JSON wrapper for the domain -> reason log."""

    def __init__(self, path: str = REASON_LOG_PATH):
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def load_with_status(self) -> Tuple[List[DomainEntry], LoadStatus]:
        """Load the reason log and report whether it was usable.

        A missing file and a corrupt file both yield no entries; the status
        tells them apart.
        """
        try:
            data = load_json_file(self._path)
        except ValueError as e:
            logger.warning(f"Reason log {self._path} is corrupt, treating as empty: {e}")
            return [], LoadStatus.CORRUPT

        if data is None:
            return [], LoadStatus.MISSING

        entries = self._parse(data)
        if entries is None:
            logger.warning(f"Reason log {self._path} has an unexpected layout, treating as empty")
            return [], LoadStatus.CORRUPT
        return entries, LoadStatus.OK

    def load(self) -> List[DomainEntry]:
        """Load reason log entries."""
        entries, _ = self.load_with_status()
        return entries

    @staticmethod
    def _parse(data) -> Optional[List[DomainEntry]]:
        if not isinstance(data, list):
            return None
        entries = []
        for item in data:
            if not isinstance(item, dict):
                return None
            domain, reason = item.get("domain"), item.get("reason")
            if not isinstance(domain, str) or not isinstance(reason, str):
                return None
            entries.append(DomainEntry(domain=domain, reason=reason))
        return entries

    @staticmethod
    def render(entries: List[DomainEntry]) -> str:
        """Serialize entries to the on-disk document."""
        return json.dumps([entry.to_dict() for entry in entries], indent=2)

    def save(self, entries: List[DomainEntry]) -> None:
        """Save reason log, replacing the previous document."""
        atomic_write(self._path, self.render(entries))

    def quarantine(self) -> Optional[str]:
        """Copy the current file aside before it is overwritten.

        Returns:
            The copy's path, or None if there was nothing to copy.
        """
        if not os.path.exists(self._path):
            return None
        base = f"{self._path}{CORRUPT_SUFFIX}-{datetime.now().strftime('%Y%m%d%H%M%S%f')}"
        target = base
        suffix = 1
        while os.path.exists(target):
            target = f"{base}-{suffix}"
            suffix += 1
        shutil.copy2(self._path, target)
        logger.warning(f"Copied corrupt reason log to {target}")
        return target
