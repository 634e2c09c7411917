"""Snapshot records and the actions produced by reconciliation."""

from dataclasses import dataclass, field
from typing import ClassVar


class DuplicateKeyError(ValueError):
    """Raised when a snapshot carries the same term key more than once."""

    def __init__(self, snapshot: str, key: str):
        self.snapshot = snapshot
        self.key = key
        super().__init__(f"Duplicate term {key!r} in {snapshot} snapshot")


@dataclass(frozen=True)
class LocalRecord:
    """A term as it appears in the local translation file."""

    key: str
    text: str  # empty means "not translated yet", never an erasure


# Baseline entries are the local file as it was at a past revision
BaselineRecord = LocalRecord


@dataclass(frozen=True)
class RemoteRecord:
    """A term as it currently exists in the remote project."""

    key: str
    remote_id: str
    text: str


@dataclass(frozen=True)
class Added:
    kind: ClassVar[str] = "added"

    key: str
    text: str


@dataclass(frozen=True)
class Updated:
    kind: ClassVar[str] = "updated"

    remote_id: str
    key: str
    text: str


@dataclass(frozen=True)
class Removed:
    kind: ClassVar[str] = "removed"

    remote_id: str
    key: str
    # Remote translation at the time of removal, shown to reviewers only
    text: str = field(default="", compare=False)


Action = Added | Updated | Removed
