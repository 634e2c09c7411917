"""Execute reconciled actions against the Traduora project."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import assert_never

from traduora_sync.sync.records import Action, Added, Removed, Updated
from traduora_sync.traduora.client import TraduoraClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionFailure:
    action: Action
    reason: str


class ApplyError(Exception):
    """Raised when one or more actions could not be applied."""

    def __init__(self, failures: list[ActionFailure]):
        self.failures = failures
        lines = [f"Failed to create/update/delete {len(failures)} terms:"]
        for f in failures:
            lines.append(
                f"    Term {f.action.key!r} with translation {f.action.text!r}. Reason: {f.reason}"
            )
        super().__init__("\n".join(lines))


@dataclass
class ApplyReport:
    applied: list[Action] = field(default_factory=list)
    failures: list[ActionFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        if self.failures:
            raise ApplyError(self.failures)


class Applier:
    def __init__(self, client: TraduoraClient, project_id: str, locale: str) -> None:
        self._client = client
        self._project_id = project_id
        self._locale = locale

    async def apply(self, actions: Iterable[Action]) -> ApplyReport:
        """Apply each action independently, collecting failures instead of stopping."""
        report = ApplyReport()
        for action in actions:
            try:
                await self._apply_one(action)
            except Exception as e:
                logger.exception("Failed to apply %s for term %s", type(action).__name__, action.key)
                report.failures.append(ActionFailure(action, str(e) or type(e).__name__))
            else:
                report.applied.append(action)

        logger.info(
            "Applied %d actions, %d failed", len(report.applied), len(report.failures)
        )
        return report

    async def _apply_one(self, action: Action) -> None:
        match action:
            case Added(key=key, text=text):
                term = await self._client.create_term(self._project_id, key)
                await self._client.edit_translation(
                    self._project_id, self._locale, term.id, text
                )
                logger.info("Created term %s", key)
            case Updated(remote_id=remote_id, key=key, text=text):
                await self._client.edit_translation(
                    self._project_id, self._locale, remote_id, text
                )
                logger.info("Updated term %s", key)
            case Removed(remote_id=remote_id, key=key):
                await self._client.delete_term(self._project_id, remote_id)
                logger.info("Deleted term %s", key)
            case _:
                assert_never(action)
