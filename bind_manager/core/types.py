"""Core types and enums."""
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass
class DomainEntry:
    """A blacklisted domain and the operator's reason for it."""

    domain: str
    reason: str

    def to_dict(self) -> dict:
        return asdict(self)


class LoadStatus(Enum):
    """How the reason log looked when it was read."""

    OK = "ok"
    MISSING = "missing"
    CORRUPT = "corrupt"

    def __str__(self):
        return self.value


class ReloadResult(Enum):
    """Outcome of a resolver reload."""

    SUCCESS = "success"
    FAILURE = "failure"

    def __str__(self):
        return self.value


class AddOutcome(Enum):
    """Outcome of adding a domain."""

    ADDED = "added"
    UPDATED = "updated"

    def __str__(self):
        return self.value


class RemoveOutcome(Enum):
    """Outcome of removing a domain."""

    REMOVED = "removed"
    REASON_ONLY = "reason_only"
    ZONE_ONLY = "zone_only"
    NOT_FOUND = "not_found"

    def __str__(self):
        return self.value


@dataclass
class AddResult:
    domain: str
    outcome: AddOutcome
    reload: Optional[ReloadResult] = None


@dataclass
class RemoveResult:
    domain: str
    outcome: RemoveOutcome
    reload: Optional[ReloadResult] = None

    @property
    def removed(self) -> bool:
        return self.outcome is not RemoveOutcome.NOT_FOUND


@dataclass
class ConsistencyReport:
    """Differences between the zone file and the reason log."""

    missing_reasons: List[str] = field(default_factory=list)
    orphan_reasons: List[str] = field(default_factory=list)
    duplicate_zones: List[str] = field(default_factory=list)
    reason_log_status: LoadStatus = LoadStatus.OK
    marker_present: bool = False

    @property
    def consistent(self) -> bool:
        return not (
            self.missing_reasons
            or self.orphan_reasons
            or self.duplicate_zones
            or self.reason_log_status is LoadStatus.CORRUPT
            or self.marker_present
        )
