# portal/draft.py

"""
Locally persisted draft of the inquiry form.

The storage backend is injected: a browser-like key/value store in the
real portal, `MemoryStorage` in tests, `JsonFileStorage` for a desktop
or kiosk shell.
"""

import json
from pathlib import Path
from threading import Lock, Timer
from typing import Any, Callable, Dict, Optional, Protocol

from core.logging_config import logger

DRAFT_KEY = "mokshamaa-inquiry-form"


class DraftStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Key/value storage kept in a dict."""

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """One file per key under a directory."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class Draft:
    """The in-progress form values under a fixed storage key."""

    def __init__(self, storage: DraftStorage, key: str = DRAFT_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> Optional[Dict[str, Any]]:
        """Saved values, or None when there is no usable draft."""
        raw = self.storage.get_item(self.key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Ignoring unreadable draft {self.key}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Ignoring draft {self.key}: not an object")
            return None
        return data

    def save(self, data: Dict[str, Any]) -> None:
        self.storage.set_item(self.key, json.dumps(data))

    def clear(self) -> None:
        self.storage.remove_item(self.key)


class Debouncer:
    """
    Runs `func` once, `delay` seconds after the last `call`.

    A delay of 0 runs synchronously, which is what tests use. Once
    `cancel` returns, no earlier `call` will run `func`.
    """

    def __init__(self, func: Callable[..., None], delay: float):
        self.func = func
        self.delay = delay
        self._timer: Optional[Timer] = None
        self._pending = None
        # Bumped by every call/flush/cancel; a timer from an older
        # generation does nothing when it fires.
        self._generation = 0
        self._lock = Lock()

    def call(self, *args):
        if self.delay <= 0:
            self.func(*args)
            return
        with self._lock:
            self._reset()
            self._pending = args
            self._timer = Timer(self.delay, self._fire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()

    def _reset(self):
        if self._timer is not None:
            self._timer.cancel()
        self._pending, self._timer = None, None
        self._generation += 1

    def _fire(self, generation: int):
        with self._lock:
            if generation != self._generation or self._pending is None:
                return
            args = self._pending
            self._pending, self._timer = None, None
            self.func(*args)

    def flush(self):
        """Run the pending call now, if any."""
        with self._lock:
            args = self._pending
            self._reset()
            if args is not None:
                self.func(*args)

    def cancel(self):
        with self._lock:
            self._reset()
