import logging
from dataclasses import dataclass

from traduora_sync.config import Settings
from traduora_sync.loaders.baseline import load_baseline
from traduora_sync.loaders.local import load_translation_file
from traduora_sync.loaders.remote import fetch_remote
from traduora_sync.sync.records import BaselineRecord, LocalRecord, RemoteRecord
from traduora_sync.traduora.client import TraduoraClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshots:
    local: list[LocalRecord]
    remote: list[RemoteRecord]
    baseline: list[BaselineRecord] | None


async def load_snapshots(
    settings: Settings,
    client: TraduoraClient,
    *,
    baseline_revision: str | None = None,
) -> Snapshots:
    """Load Local, Remote and (when a revision is given) Baseline.

    Any failure raises SnapshotError before reconciliation can start.
    """
    local = load_translation_file(settings.translation_file)
    remote = await fetch_remote(
        client, settings.traduora_project_id, settings.traduora_locale
    )

    baseline = None
    if baseline_revision:
        baseline = load_baseline(
            settings.baseline_repo, baseline_revision, settings.translation_file
        )
    else:
        logger.info("No baseline revision configured, skipping three-way refinement")

    return Snapshots(local=local, remote=remote, baseline=baseline)
