"""Review endpoints: inspect the proposed changes, deselect some, apply the rest."""

import asyncio
import logging

from fastapi import APIRouter, HTTPException

from traduora_sync.config import Settings
from traduora_sync.loaders.errors import SnapshotError
from traduora_sync.loaders.snapshots import load_snapshots
from traduora_sync.review.models import (
    ApplyResponse,
    FailureView,
    PlanEntry,
    PlanResponse,
    SelectRequest,
)
from traduora_sync.sync.applier import Applier
from traduora_sync.sync.records import Action, DuplicateKeyError
from traduora_sync.sync.refine import reconcile
from traduora_sync.traduora.client import TraduoraClient

logger = logging.getLogger(__name__)

router = APIRouter()

# These will be injected at app startup
_settings: Settings | None = None
_client: TraduoraClient | None = None
_applier: Applier | None = None

# Current plan, held in memory only until it is applied or refreshed
_actions: list[Action] | None = None
_entries: list[PlanEntry] = []

# Held while a plan is being computed or applied
_lock = asyncio.Lock()


def configure(settings: Settings, client: TraduoraClient, applier: Applier) -> None:
    global _settings, _client, _applier, _lock
    _settings = settings
    _client = client
    _applier = applier
    _lock = asyncio.Lock()
    reset_plan()


def reset_plan() -> None:
    global _actions, _entries
    _actions = None
    _entries = []


async def _refresh() -> None:
    global _actions, _entries
    try:
        snapshots = await load_snapshots(
            _settings, _client, baseline_revision=_settings.baseline_revision
        )
        actions = reconcile(snapshots.local, snapshots.remote, snapshots.baseline)
    except DuplicateKeyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SnapshotError as e:
        logger.error("Failed to load snapshots: %s", e)
        raise HTTPException(status_code=502, detail=str(e))

    _actions = actions
    _entries = [PlanEntry.from_action(i, a) for i, a in enumerate(actions)]
    logger.info("Computed plan with %d actions", len(actions))


def _plan_response() -> PlanResponse:
    return PlanResponse(baseline_revision=_settings.baseline_revision, entries=_entries)


@router.get("/plan")
async def get_plan() -> PlanResponse:
    """Return the current plan, computing it on first access."""
    async with _lock:
        if _actions is None:
            await _refresh()
        return _plan_response()


@router.post("/plan/refresh")
async def refresh_plan() -> PlanResponse:
    """Reload all snapshots and recompute, discarding earlier selections."""
    async with _lock:
        await _refresh()
        return _plan_response()


@router.post("/plan/select")
async def select(request: SelectRequest) -> PlanResponse:
    if _actions is None:
        raise HTTPException(status_code=409, detail="No plan computed yet")

    if request.all:
        targets = [e for e in _entries if request.kind in (None, e.kind)]
    else:
        by_key = {e.key: e for e in _entries}
        unknown = [k for k in request.keys if k not in by_key]
        if unknown:
            raise HTTPException(status_code=404, detail=f"Unknown terms: {unknown}")
        targets = [by_key[k] for k in request.keys]

    for entry in targets:
        entry.selected = request.selected
    return _plan_response()


@router.post("/apply")
async def apply() -> ApplyResponse:
    """Apply every selected entry. The plan is discarded before anything runs."""
    async with _lock:
        if _actions is None:
            raise HTTPException(status_code=409, detail="No plan computed yet")

        selected = [a for a, e in zip(_actions, _entries) if e.selected]
        reset_plan()
        report = await _applier.apply(selected)

    return ApplyResponse(
        applied=len(report.applied),
        failures=[
            FailureView(key=f.action.key, kind=f.action.kind, reason=f.reason)
            for f in report.failures
        ],
    )
