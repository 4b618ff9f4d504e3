"""
Durable local key/value state.

Stores one JSON document per key as a file under a state directory, mirroring
the get/set/remove surface of browser local storage. Values are strings; the
callers own serialization.
"""

import os
import re
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

load_dotenv()
STATE_PATH = Path(os.getenv("VITAE_STATE_PATH", str(Path.home() / ".vitae" / "state"))).expanduser()

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalStorage:
    """
    File-backed key/value storage.

    Each key maps to `<state_dir>/<key>.json`. Keys are restricted to a safe
    filename alphabet so a key can never escape the state directory.
    """

    def __init__(self, state_dir: Path = None):
        if state_dir is None:
            state_dir = STATE_PATH
        self.state_dir = Path(state_dir)

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.state_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string for key, or None if nothing is stored."""
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        self.state_dir.mkdir(parents=True, exist_ok=True)
        # Atomic replace: readers see the old value or the new one
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        if path.exists():
            path.unlink()

    def keys(self) -> list[str]:
        if not self.state_dir.exists():
            return []
        return sorted(p.stem for p in self.state_dir.glob("*.json"))


class MemoryStorage(LocalStorage):
    """In-process storage with the LocalStorage interface (nothing touches disk)."""

    def __init__(self, initial: Dict[str, str] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._items)
