"""Three-way refinement of tentative actions against a baseline snapshot."""

import logging
from collections.abc import Iterable, Sequence
from typing import assert_never

from traduora_sync.sync.join import Both, LeftOnly, RightOnly, merge_join, sort_by_key
from traduora_sync.sync.merge import two_way_merge
from traduora_sync.sync.records import (
    Action,
    Added,
    BaselineRecord,
    LocalRecord,
    RemoteRecord,
    Removed,
    Updated,
)

logger = logging.getLogger(__name__)


def refine(
    tentative: Sequence[Action],
    baseline: Iterable[BaselineRecord] | None,
) -> list[Action]:
    """Drop tentative actions that would undo independent remote changes.

    The baseline is the local file as it was when Local and Remote last
    agreed. Comparing against it tells a real local edit apart from a local
    file that merely went stale while someone changed the remote project.

    Args:
        tentative: Output of :func:`two_way_merge`.
        baseline: Baseline records, or None to skip refinement entirely.

    Returns:
        The surviving tentative actions, in their original key order.
    """
    if baseline is None:
        return list(tentative)

    kept: list[Action] = []

    for outcome in merge_join(
        sort_by_key(tentative),
        sort_by_key(baseline),
        name_left="tentative",
        name_right="baseline",
    ):
        match outcome:
            case LeftOnly(left=Removed() as action):
                # Never tracked locally, most likely created on the remote side
                logger.debug("Keeping remote-only term %s", action.key)
            case LeftOnly(left=Added() | Updated() as action):
                kept.append(action)
            case RightOnly():
                # Deleted on both sides since the baseline
                pass
            case Both(left=Removed() as action):
                kept.append(action)
            case Both(left=Added() as action):
                logger.debug("Not re-creating %s, it was deleted remotely", action.key)
            case Both(left=Updated() as action, right=base):
                if action.text != base.text:
                    kept.append(action)
                else:
                    logger.debug("Not overwriting remote edit of %s with stale local text", action.key)
            case _:
                assert_never(outcome)

    logger.debug("Three-way refinement kept %d of %d actions", len(kept), len(tentative))
    return kept


def reconcile(
    local: Iterable[LocalRecord],
    remote: Iterable[RemoteRecord],
    baseline: Iterable[BaselineRecord] | None = None,
) -> list[Action]:
    """Run the two-way merge and, when a baseline is given, refine its result."""
    return refine(two_way_merge(local, remote), baseline)
