import json

from smartfill import config


def test_defaults_when_missing(monkeypatch, tmp_path):
    monkeypatch.setenv("APPDATA", str(tmp_path))
    cfg = config.load_config()
    assert cfg == config.DEFAULTS
    assert cfg["debounce_ms"] == 150

def test_save_and_merge(monkeypatch, tmp_path):
    monkeypatch.setenv("APPDATA", str(tmp_path))
    config.save_config({"namespace": "cush"})
    cfg = config.load_config()
    assert cfg["namespace"] == "cush"
    assert cfg["debounce_ms"] == 150
    with open(config.config_path(), encoding="utf-8") as f:
        assert json.load(f) == {"namespace": "cush"}

def test_unreadable_config_falls_back(monkeypatch, tmp_path):
    monkeypatch.setenv("APPDATA", str(tmp_path))
    with open(config.config_path(), "w", encoding="utf-8") as f:
        f.write("{nope")
    assert config.load_config() == config.DEFAULTS
