"""
smartfill.suggestions

Per-field autofill history and ranked completions.

History for a field is a JSON list of previously accepted values kept in a
KeyValueStore under autofill_key(namespace, field): most recent first, no
duplicates, at most HISTORY_LIMIT entries.
"""

import json
import logging
import threading
from collections import defaultdict
from typing import Dict, List, Optional

from .storage import KeyValueStore, MemoryStore, autofill_key

log = logging.getLogger(__name__)

HISTORY_LIMIT = 10
MIN_INPUT_LENGTH = 2
MAX_SUGGESTIONS = 3

PREFIX_CONFIDENCE = 0.9
DOMAIN_CONFIDENCE = 0.8
SUBSTRING_CONFIDENCE = 0.6

COMMON_EMAIL_DOMAINS = ["gmail.com", "yahoo.com", "outlook.com", "hotmail.com"]


def rank_history(history: List[str], current_input: str) -> List[Dict]:
    """Literal substring matches, case-insensitive, in history order."""
    needle = current_input.lower()
    matches = []
    for entry in history:
        lowered = entry.lower()
        if needle not in lowered:
            continue
        confidence = PREFIX_CONFIDENCE if lowered.startswith(needle) else SUBSTRING_CONFIDENCE
        matches.append({"value": entry, "confidence": confidence})
    return matches


def email_domain_suggestions(current_input: str) -> List[Dict]:
    """
    'bob@gm' -> [{"value": "bob@gmail.com", "confidence": 0.8}]
    """
    if "@" not in current_input:
        return []
    parts = current_input.split("@")
    local, domain = parts[0], parts[1]
    return [
        {"value": f"{local}@{d}", "confidence": DOMAIN_CONFIDENCE}
        for d in COMMON_EMAIL_DOMAINS
        if d.startswith(domain)
    ]


class SuggestionStore:
    """
    Reads and writes field history through an injected KeyValueStore.

    Storage problems never reach the caller: unreadable history is treated as
    empty and failed writes are logged and dropped.
    """

    def __init__(self, store: Optional[KeyValueStore] = None, namespace: str = "smartfill"):
        self.store = store if store is not None else MemoryStore()
        self.namespace = namespace
        # one lock per field name ever accepted; field names come from the
        # form's fixed set of inputs, so this stays small
        self._locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    def _lock_for(self, field: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks[field]

    def history(self, field: str) -> List[str]:
        key = autofill_key(self.namespace, field)
        try:
            raw = self.store.get(key)
            if raw is None:
                return []
            data = json.loads(raw)
        except Exception as e:
            log.warning("Unreadable history for %r, treating as empty: %s", field, e)
            return []
        if not isinstance(data, list) or not all(isinstance(v, str) for v in data):
            log.warning("Malformed history for %r, treating as empty", field)
            return []
        return data

    def get_suggestions(self, field: str, current_input: str) -> List[Dict]:
        if len(current_input) < MIN_INPUT_LENGTH:
            return []

        results = rank_history(self.history(field), current_input)

        if field == "email":
            results.extend(email_domain_suggestions(current_input))

        return results[:MAX_SUGGESTIONS]

    def accept_suggestion(self, field: str, value: str) -> None:
        if not field or not value:
            log.debug("Ignoring empty acceptance for field %r", field)
            return
        with self._lock_for(field):
            previous = self.history(field)
            updated = [value] + [v for v in previous if v != value]
            updated = updated[:HISTORY_LIMIT]
            try:
                self.store.set(autofill_key(self.namespace, field), json.dumps(updated))
            except Exception as e:
                log.warning("Could not save history for %r: %s", field, e)
