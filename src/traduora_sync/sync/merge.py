"""Two-way merge: compare the local file against the remote project."""

import logging
from collections.abc import Iterable
from typing import assert_never

from traduora_sync.sync.join import Both, LeftOnly, RightOnly, merge_join, sort_by_key
from traduora_sync.sync.records import Action, Added, LocalRecord, RemoteRecord, Removed, Updated

logger = logging.getLogger(__name__)


def two_way_merge(
    local: Iterable[LocalRecord],
    remote: Iterable[RemoteRecord],
) -> list[Action]:
    """Compute the tentative actions that would make Remote look like Local.

    Args:
        local: Terms from the local translation file.
        remote: Terms currently in the remote project.

    Returns:
        One action per differing key, ascending by key. A key whose local
        text is empty never produces an update, since an empty local value
        means the translation has not been written yet.
    """
    actions: list[Action] = []

    for outcome in merge_join(
        sort_by_key(local),
        sort_by_key(remote),
        name_left="local",
        name_right="remote",
    ):
        match outcome:
            case Both(left=loc, right=rem):
                if loc.text == rem.text:
                    continue
                if not loc.text:
                    logger.debug("Term %s has no local translation, keeping remote text", loc.key)
                    continue
                actions.append(Updated(rem.remote_id, loc.key, loc.text))
            case LeftOnly(left=loc):
                actions.append(Added(loc.key, loc.text))
            case RightOnly(right=rem):
                actions.append(Removed(rem.remote_id, rem.key, rem.text))
            case _:
                assert_never(outcome)

    logger.debug(
        "Two-way merge: %d added, %d updated, %d removed",
        sum(isinstance(a, Added) for a in actions),
        sum(isinstance(a, Updated) for a in actions),
        sum(isinstance(a, Removed) for a in actions),
    )
    return actions
