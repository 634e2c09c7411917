"""Load the remote snapshot from a Traduora project."""

import logging

import httpx

from traduora_sync.loaders.errors import SnapshotError
from traduora_sync.sync.records import RemoteRecord
from traduora_sync.traduora.client import (
    TraduoraAuthError,
    TraduoraClient,
    TraduoraNotFoundError,
)

logger = logging.getLogger(__name__)


async def fetch_remote(
    client: TraduoraClient, project_id: str, locale: str
) -> list[RemoteRecord]:
    """Fetch all terms of a project together with their translation in ``locale``.

    Terms without a translation get empty text. Translations whose term no
    longer exists are ignored.
    """
    try:
        terms = await client.list_terms(project_id)
        translations = await client.list_translations(project_id, locale)
    except (TraduoraAuthError, TraduoraNotFoundError, httpx.HTTPError) as e:
        raise SnapshotError(
            f"Failed to load terms for locale {locale} in project {project_id}: {e}"
        ) from e

    text_by_term = {t.term_id: t.value for t in translations}
    records = [
        RemoteRecord(key=term.value, remote_id=term.id, text=text_by_term.get(term.id, ""))
        for term in terms
    ]

    orphans = set(text_by_term) - {term.id for term in terms}
    if orphans:
        logger.debug("Ignoring %d translations without a term", len(orphans))

    logger.info("Fetched %d terms from project %s (%s)", len(records), project_id, locale)
    return records
