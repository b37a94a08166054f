# File: tests/test_kv_store.py

import os

import pytest

from db.kv_store import JsonFileStore, MemoryStore, default_session_path


def test_memory_store_stores_text():
    kv = MemoryStore()
    assert kv.get("volume") is None
    kv.set("volume", 100)
    assert kv.get("volume") == "100"


def test_missing_file_reads_as_empty(tmp_path):
    kv = JsonFileStore(str(tmp_path / "nope.json"))
    assert kv.get("volume") is None
    assert not (tmp_path / "nope.json").exists()


def test_first_write_creates_parent_dir(tmp_path):
    path = tmp_path / "a" / "b" / "session.json"
    JsonFileStore(str(path)).set("target", "20")
    assert path.exists()
    assert JsonFileStore(str(path)).get("target") == "20"


@pytest.mark.parametrize("content", ["[1, 2]", "{not json"])
def test_unreadable_json_starts_empty_and_is_rewritten(tmp_path, capsys, content):
    path = tmp_path / "session.json"
    path.write_text(content, encoding="utf-8")
    kv = JsonFileStore(str(path))
    assert kv.get("volume") is None
    assert "Warning" in capsys.readouterr().err

    kv.set("volume", "100")
    assert JsonFileStore(str(path)).get("volume") == "100"


def test_set_skips_rewrite_for_equal_text(tmp_path):
    path = tmp_path / "session.json"
    kv = JsonFileStore(str(path))
    kv.set("volume", "100")
    path.write_text('{"volume": "100", "marker": "kept"}', encoding="utf-8")

    # 100 and "100" store the same text
    kv.set("volume", 100)
    assert "marker" in path.read_text(encoding="utf-8")


def test_last_write_wins(tmp_path):
    kv = JsonFileStore(str(tmp_path / "session.json"))
    kv.set("volume", "1")
    kv.set("volume", "2")
    assert JsonFileStore(kv.path).get("volume") == "2"


def test_default_path_follows_data_dir(monkeypatch, tmp_path):
    monkeypatch.delenv("SESSION_FILE", raising=False)
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    assert default_session_path() == os.path.join(str(tmp_path), "session.json")
    assert JsonFileStore().path == os.path.join(str(tmp_path), "session.json")


def test_session_file_overrides_data_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("DATA_DIR", "elsewhere")
    monkeypatch.setenv("SESSION_FILE", str(tmp_path / "mine.json"))
    assert default_session_path() == str(tmp_path / "mine.json")
