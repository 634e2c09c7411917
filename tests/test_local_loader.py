import codecs

import pytest

from traduora_sync.loaders.errors import SnapshotError
from traduora_sync.loaders.local import decode_text, load_translation_file, parse_translation_json
from traduora_sync.sync.records import DuplicateKeyError, LocalRecord


def test_parse_flat_object():
    data = b'{"menu.open": "Open", "menu.close": ""}'
    assert parse_translation_json(data, "en.json") == [
        LocalRecord("menu.open", "Open"),
        LocalRecord("menu.close", ""),
    ]


def test_utf8_bom_is_stripped():
    data = codecs.BOM_UTF8 + '{"a": "ä"}'.encode("utf-8")
    assert parse_translation_json(data, "en.json") == [LocalRecord("a", "ä")]


@pytest.mark.parametrize("encoding,bom", [
    ("utf-16-le", codecs.BOM_UTF16_LE),
    ("utf-16-be", codecs.BOM_UTF16_BE),
    ("utf-32-le", codecs.BOM_UTF32_LE),
])
def test_other_boms(encoding, bom):
    data = bom + '{"k": "v"}'.encode(encoding)
    assert decode_text(data) == '{"k": "v"}'


def test_duplicate_key_rejected():
    with pytest.raises(DuplicateKeyError) as exc:
        parse_translation_json(b'{"a": "1", "a": "2"}', "en.json")
    assert exc.value.key == "a"
    assert exc.value.snapshot == "en.json"


def test_invalid_json():
    with pytest.raises(SnapshotError, match="en.json"):
        parse_translation_json(b'{"a": ', "en.json")


def test_not_an_object():
    with pytest.raises(SnapshotError):
        parse_translation_json(b'[["a", "b"]]', "en.json")


def test_nested_value_rejected():
    with pytest.raises(SnapshotError, match="not a string"):
        parse_translation_json(b'{"a": {"b": "c"}}', "en.json")


def test_load_from_file(tmp_path):
    path = tmp_path / "en.json"
    path.write_text('{"x": "y"}', encoding="utf-8")
    assert load_translation_file(path) == [LocalRecord("x", "y")]


def test_missing_file(tmp_path):
    with pytest.raises(SnapshotError, match="Failed to open file"):
        load_translation_file(tmp_path / "missing.json")
