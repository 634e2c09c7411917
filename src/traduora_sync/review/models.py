"""Pydantic models for the review API."""

from typing import Literal

from pydantic import BaseModel

from traduora_sync.sync.records import Action

ActionKind = Literal["added", "updated", "removed"]


class PlanEntry(BaseModel):
    """One proposed remote change, as shown for review."""

    index: int
    kind: ActionKind
    key: str
    text: str
    remote_id: str | None = None
    selected: bool = True

    @classmethod
    def from_action(cls, index: int, action: Action) -> "PlanEntry":
        return cls(
            index=index,
            kind=action.kind,
            key=action.key,
            text=action.text,
            remote_id=getattr(action, "remote_id", None),
        )


class PlanResponse(BaseModel):
    baseline_revision: str | None = None
    entries: list[PlanEntry]


class SelectRequest(BaseModel):
    """Toggle selection of some entries, or of all of them with ``all``.

    With ``all`` and ``kind`` set, only entries of that kind are toggled.
    """

    keys: list[str] = []
    all: bool = False
    kind: ActionKind | None = None
    selected: bool = True


class FailureView(BaseModel):
    key: str
    kind: ActionKind
    reason: str


class ApplyResponse(BaseModel):
    applied: int
    failures: list[FailureView]
