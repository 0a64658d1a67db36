import json
import threading

import pytest

from smartfill.errors import StorageError
from smartfill.storage import (
    JsonFileStore,
    MemoryStore,
    autofill_key,
    default_store_path,
)
from smartfill.suggestions import SuggestionStore

def test_autofill_key():
    assert autofill_key("cush", "email") == "cush_autofill_email"

def test_memory_store():
    mem = MemoryStore()
    assert mem.get("k") is None
    mem.set("k", "v1")
    mem.set("k", "v2")
    assert mem.get("k") == "v2"

def test_json_file_store_roundtrip(tmp_path):
    path = str(tmp_path / "sub" / "history.json")
    store = JsonFileStore(path)
    assert store.get("a") is None
    store.set("a", "1")
    store.set("b", "2")
    reopened = JsonFileStore(path)
    assert reopened.get("a") == "1"
    assert reopened.get("b") == "2"
    with open(path, "rb") as f:
        assert json.loads(f.read()) == {"a": "1", "b": "2"}

def test_json_file_store_corrupt_read_raises(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{broken")
    with pytest.raises(StorageError):
        JsonFileStore(str(path)).get("a")

def test_json_file_store_non_object(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("[1, 2]")
    with pytest.raises(StorageError):
        JsonFileStore(str(path)).get("a")

def test_json_file_store_overwrites_corrupt_file(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{broken")
    store = JsonFileStore(str(path))
    store.set("a", "1")
    assert store.get("a") == "1"

def test_suggestion_store_on_corrupt_file(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("garbage")
    s = SuggestionStore(JsonFileStore(str(path)))
    assert s.get_suggestions("email", "bob@gm") == [{"value": "bob@gmail.com", "confidence": 0.8}]
    s.accept_suggestion("email", "bob@gmail.com")
    assert s.history("email") == ["bob@gmail.com"]

def test_default_store_path(monkeypatch, tmp_path):
    monkeypatch.setenv("APPDATA", str(tmp_path))
    assert default_store_path() == str(tmp_path / "SmartFill" / "history.json")
    monkeypatch.delenv("APPDATA")
    assert default_store_path().endswith(".smartfill/history.json") or default_store_path().endswith(".smartfill\\history.json")

def test_stores_on_same_path_share_writes(tmp_path):
    path = str(tmp_path / "history.json")
    stores = [JsonFileStore(path) for _ in range(10)]
    threads = [
        threading.Thread(target=store.set, args=(f"k{i}", str(i)))
        for i, store in enumerate(stores)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert {f"k{i}": JsonFileStore(path).get(f"k{i}") for i in range(10)} == {f"k{i}": str(i) for i in range(10)}
    # no temp files left behind
    assert [p.name for p in tmp_path.iterdir()] == ["history.json"]
