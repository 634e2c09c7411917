"""Load the local JSON translation file."""

import codecs
import json
import logging
from pathlib import Path

from traduora_sync.loaders.errors import SnapshotError
from traduora_sync.sync.records import DuplicateKeyError, LocalRecord

logger = logging.getLogger(__name__)

# Longest BOMs first so UTF-32 LE is not mistaken for UTF-16 LE
_BOMS = [
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
]


def decode_text(data: bytes) -> str:
    """Decode file content, honouring a leading byte order mark if present."""
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return data[len(bom):].decode(encoding)
    return data.decode("utf-8")


def parse_translation_json(data: bytes, source: str) -> list[LocalRecord]:
    """Parse a flat ``{term: translation}`` JSON object.

    Args:
        data: Raw file content.
        source: Name used in error messages and to label duplicate keys.

    Raises:
        SnapshotError: content is not a flat object of strings.
        DuplicateKeyError: the object repeats a term.
    """

    def _pairs(pairs: list[tuple[str, object]]) -> dict[str, object]:
        result = {}
        for key, value in pairs:
            if key in result:
                raise DuplicateKeyError(source, key)
            result[key] = value
        return result

    try:
        parsed = json.loads(decode_text(data), object_pairs_hook=_pairs)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SnapshotError(
            f"Failed to deserialize terms and translations from {source}: {e}"
        ) from e

    if not isinstance(parsed, dict):
        raise SnapshotError(f"{source} does not contain a map of terms and translations")

    records = []
    for term, translation in parsed.items():
        if not isinstance(translation, str):
            raise SnapshotError(
                f"Translation for term {term!r} in {source} is not a string"
            )
        records.append(LocalRecord(term, translation))
    return records


def load_translation_file(path: str | Path) -> list[LocalRecord]:
    """Read the local translation file into records."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SnapshotError(f"Failed to open file {path}: {e}") from e

    records = parse_translation_json(data, str(path))
    logger.info("Loaded %d terms from %s", len(records), path)
    return records
