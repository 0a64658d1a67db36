# smartfill/config.py
"""
Simple settings persistence for SmartFill.
Settings saved as JSON in %APPDATA%/SmartFill/config.json (Windows) or ~/.smartfill/config.json (fallback)
"""

import os
import json
import logging
from typing import Dict, Any

log = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "namespace": "smartfill",
    "debounce_ms": 150,
    "store_path": None  # if None, storage.default_store_path() should be used
}

def _appdata_dir() -> str:
    appdata = os.getenv("APPDATA")
    if appdata:
        d = os.path.join(appdata, "SmartFill")
    else:
        d = os.path.join(os.path.expanduser("~"), ".smartfill")
    os.makedirs(d, exist_ok=True)
    return d

def config_path() -> str:
    return os.path.join(_appdata_dir(), "config.json")

def load_config() -> Dict[str, Any]:
    p = config_path()
    if not os.path.exists(p):
        return DEFAULTS.copy()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
            out = DEFAULTS.copy()
            out.update(data or {})
            return out
    except Exception:
        log.warning("Ignoring unreadable config at %s", p)
        return DEFAULTS.copy()

def save_config(cfg: Dict[str, Any]) -> None:
    p = config_path()
    with open(p, "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)
