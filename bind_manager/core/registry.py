"""Blacklist registry: keeps the zone file and the reason log in step."""

import os
from collections import Counter
from contextlib import contextmanager
from typing import List, Optional

from bind_manager.core.config import Config
from bind_manager.core.constants import APP_NAME, DEFAULT_REASON, INCONSISTENT_SUFFIX
from bind_manager.core.lock import FileLock
from bind_manager.core.logger import logger
from bind_manager.core.protocols import Reloader
from bind_manager.core.types import (
    AddOutcome,
    AddResult,
    ConsistencyReport,
    DomainEntry,
    LoadStatus,
    RemoveOutcome,
    RemoveResult,
)
from bind_manager.repositories.reason_repository import ReasonRepository
from bind_manager.repositories.transaction import StoreTransaction
from bind_manager.repositories.zone_repository import ZoneRepository
from bind_manager.services.reload_service import NullReloadService, ReloadService

ABOUT_TEXT = (
    "This tool was created to aid in managing BIND blacklisted zones - making it easier to add, "
    "remove, and list domains that are blocked by the DNS server.\n"
    "It's meant to be simple and efficient, and it uses a JSON file to store the reasons for "
    "blacklisting domains."
)


class DomainRegistry:
    """Add, remove and list blacklisted domains.

    Each mutating call is one short transaction: both stores are read under
    the lock, the new contents of each are staged, and both are committed
    together before the resolver is reloaded.
    """

    def __init__(
        self,
        reasons: ReasonRepository,
        zones: ZoneRepository,
        reloader: Optional[Reloader] = None,
        lock: Optional[FileLock] = None,
    ):
        """Initialize the registry.

        Args:
            reasons: Reason log store
            zones: Zone declarations store
            reloader: Resolver reload capability. Defaults to a no-op.
            lock: Exclusive lock held around mutations. None disables locking.
        """
        self.reasons = reasons
        self.zones = zones
        self.reloader = reloader or NullReloadService()
        self.lock = lock

    @classmethod
    def from_config(cls, config: Config, reload: bool = True) -> "DomainRegistry":
        """Wire a registry from configuration."""
        if reload:
            reloader = ReloadService(config.reload_command, timeout=config.reload_timeout)
        else:
            reloader = NullReloadService()
        return cls(
            reasons=ReasonRepository(config.reason_log),
            zones=ZoneRepository(config.zones_file, config.blocked_db),
            reloader=reloader,
            lock=FileLock(config.lock_file, timeout=config.lock_timeout),
        )

    @property
    def marker_path(self) -> str:
        return self.reasons.path + INCONSISTENT_SUFFIX

    @contextmanager
    def _locked(self):
        if self.lock is None:
            yield
            return
        with self.lock:
            yield

    def _transaction(self) -> StoreTransaction:
        return StoreTransaction(self.marker_path)

    def add(self, domain: str, reason: str = DEFAULT_REASON) -> AddResult:
        """Blacklist ``domain``, or update its reason if already present.

        Raises:
            OSError: The zone file or reason log could not be read or written.
            LockError: Another run holds the lock.
        """
        with self._locked():
            entries, status = self.reasons.load_with_status()
            existing = next((entry for entry in entries if entry.domain == domain), None)
            transaction = self._transaction()

            if existing is not None:
                existing.reason = reason
                outcome = AddOutcome.UPDATED
            else:
                # Read first so a missing zones file aborts before any write
                zone_content = self.zones.read()
                entries.append(DomainEntry(domain=domain, reason=reason))
                if domain in self.zones.list_domains(zone_content):
                    logger.warning(f"{domain} is already declared in {self.zones.path}; recording reason only")
                else:
                    transaction.stage(self.zones.path, self.zones.render_with(domain, zone_content))
                outcome = AddOutcome.ADDED

            transaction.stage(self.reasons.path, self.reasons.render(entries))
            if status is LoadStatus.CORRUPT:
                self.reasons.quarantine()
            transaction.commit()

        logger.info(f"add {domain}: {outcome}")
        result = AddResult(domain=domain, outcome=outcome)
        # A reason-only update leaves the zones untouched
        if outcome is AddOutcome.ADDED:
            result.reload = self.reloader.reload()
        return result

    def remove(self, domain: str) -> RemoveResult:
        """Remove ``domain`` from both stores.

        The resolver is reloaded even when nothing matched.
        """
        with self._locked():
            entries, _ = self.reasons.load_with_status()
            index = next((i for i, entry in enumerate(entries) if entry.domain == domain), None)
            zone_content, zone_removed = self.zones.render_without(domain)

            transaction = self._transaction()
            if zone_removed:
                transaction.stage(self.zones.path, zone_content)
            if index is not None:
                del entries[index]
                transaction.stage(self.reasons.path, self.reasons.render(entries))
            transaction.commit()

        if index is not None and zone_removed:
            outcome = RemoveOutcome.REMOVED
        elif index is not None:
            logger.warning(f"{domain} had a reason but no zone declaration")
            outcome = RemoveOutcome.REASON_ONLY
        elif zone_removed:
            logger.warning(f"{domain} had a zone declaration but no reason")
            outcome = RemoveOutcome.ZONE_ONLY
        else:
            outcome = RemoveOutcome.NOT_FOUND

        logger.info(f"remove {domain}: {outcome}")
        return RemoveResult(domain=domain, outcome=outcome, reload=self.reloader.reload())

    def list_entries(self) -> List[DomainEntry]:
        """Zone-file domains in alphabetical order with their display reasons."""
        reasons = {entry.domain: entry.reason for entry in self.reasons.load()}
        domains = sorted(self.zones.list_domains())
        return [DomainEntry(domain=domain, reason=reasons.get(domain) or DEFAULT_REASON) for domain in domains]

    @staticmethod
    def format_listing(entries: List[DomainEntry]) -> List[str]:
        count = len(entries)
        lines = [f"Listing {count} {'domain' if count == 1 else 'domains'}:"]
        width = max((len(entry.domain) for entry in entries), default=0)
        for entry in entries:
            lines.append(f" - {entry.domain:<{width}} » {entry.reason}")
        return lines

    @staticmethod
    def about() -> List[str]:
        """Name, version and authorship banner."""
        from bind_manager import __author__, __version__

        heading = f"--- {APP_NAME} v{__version__} ---"
        authors = ", ".join(part.strip() for part in __author__.split(":"))
        return [heading, ABOUT_TEXT, f"\nAuthors: {authors}", "-" * len(heading)]

    def check(self) -> ConsistencyReport:
        """Compare the two stores without changing either."""
        entries, status = self.reasons.load_with_status()
        zone_domains = self.zones.list_domains()
        reason_domains = {entry.domain for entry in entries}
        declared = set(zone_domains)

        return ConsistencyReport(
            missing_reasons=sorted(declared - reason_domains),
            orphan_reasons=sorted(reason_domains - declared),
            duplicate_zones=sorted(domain for domain, count in Counter(zone_domains).items() if count > 1),
            reason_log_status=status,
            marker_present=os.path.exists(self.marker_path),
        )
