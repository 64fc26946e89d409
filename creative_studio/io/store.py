"""
Durable key-value persistence for the saved credential and the last prompt.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union


CREDENTIAL_KEY = "credential"
LAST_PROMPT_KEY = "last_prompt"

# One lock per file, shared by every KeyValueStore in the process.
_PATH_LOCKS: Dict[Path, threading.Lock] = {}
_PATH_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.expanduser().resolve()
    with _PATH_LOCKS_GUARD:
        if key not in _PATH_LOCKS:
            _PATH_LOCKS[key] = threading.Lock()
        return _PATH_LOCKS[key]


class KeyValueStore:
    """String key-value store backed by a single JSON file."""

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the store.

        Args:
            path: JSON file holding the values. Created on first write.
        """
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def load(self, key: str) -> Optional[str]:
        """Return the stored value, or None when absent."""
        with self._lock:
            return self._read().get(key)

    def store(self, key: str, value: str):
        """Persist a value."""
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove(self, key: str):
        """Delete a value if present."""
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)


class Debouncer:
    """
    Delays a callback until calls have stopped for ``delay`` seconds.

    Each call restarts the timer, so only the last value in a burst reaches
    the callback.
    """

    def __init__(self, delay: float, callback: Callable[[Any], None]):
        self.delay = delay
        self.callback = callback
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Any = None
        self._has_pending = False
        self._generation = 0

    def call(self, value: Any):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._pending = value
            self._has_pending = True
            self._timer = threading.Timer(self.delay, self._fire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()

    def _fire(self, generation: Optional[int] = None):
        # Callback runs under the lock so cancel() never returns mid-write.
        with self._lock:
            if not self._has_pending:
                return
            if generation is not None and generation != self._generation:
                return
            value = self._pending
            self._pending = None
            self._has_pending = False
            self._timer = None
            self.callback(value)

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._has_pending

    def cancel(self):
        """Drop the pending value without invoking the callback."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None
            self._has_pending = False

    def flush(self):
        """Invoke the callback now for the pending value, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
        self._fire()


class StudioStore:
    """Typed access to the two persisted studio values."""

    def __init__(self, kv: KeyValueStore, debounce_seconds: float = 0.5):
        """
        Initialize the store.

        Args:
            kv: Underlying key-value store.
            debounce_seconds: Inactivity window before a prompt edit is written.
        """
        self.kv = kv
        self._prompt_writer = Debouncer(
            debounce_seconds,
            lambda value: self.kv.store(LAST_PROMPT_KEY, value),
        )

    @classmethod
    def at(cls, path: Union[str, Path], debounce_seconds: float = 0.5) -> "StudioStore":
        return cls(KeyValueStore(path), debounce_seconds=debounce_seconds)

    def load_credential(self) -> Optional[str]:
        return self.kv.load(CREDENTIAL_KEY)

    def save_credential(self, value: str):
        self.kv.store(CREDENTIAL_KEY, value)

    def load_last_prompt(self) -> Optional[str]:
        return self.kv.load(LAST_PROMPT_KEY)

    def save_last_prompt(self, value: str):
        """Schedule a debounced write of the prompt. Empty prompts are not saved."""
        if not value:
            return
        self._prompt_writer.call(value)

    def clear_last_prompt(self):
        # Pending write must not resurrect the prompt after removal.
        self._prompt_writer.cancel()
        self.kv.remove(LAST_PROMPT_KEY)

    def flush(self):
        self._prompt_writer.flush()
