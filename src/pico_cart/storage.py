import asyncio
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable

from .exceptions import CorruptCartDataError

logger = logging.getLogger(__name__)

@runtime_checkable
class KeyValueStorage(Protocol):
    async def get_item(self, key: str) -> Optional[str]: ...
    async def set_item(self, key: str, value: str) -> None: ...
    async def clear(self) -> None: ...

class MemoryStorage:
    """Process-local storage. Contents are lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    async def clear(self) -> None:
        self._data.clear()

class JsonFileStorage:
    """
    Keeps every key in a single JSON object on disk.

    Reads and writes run in a worker thread; a write replaces the file
    atomically so a crash never leaves a half-written record behind.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptCartDataError(str(self.path), f"invalid JSON ({e.msg})") from e
        if not isinstance(data, dict):
            raise CorruptCartDataError(str(self.path), "file does not hold a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise CorruptCartDataError(key, f"expected a string record in {self.path}, got {type(value).__name__}")
        return value

    def _set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                data = self._read_all()
            except CorruptCartDataError:
                logger.warning("Replacing unreadable storage file %s", self.path, exc_info=True)
                data = {}
            data[key] = value
            self._write_all(data)
        logger.debug("Wrote %d bytes under %r to %s", len(value), key, self.path)

    def _clear(self) -> None:
        with self._lock:
            self.path.unlink(missing_ok=True)

    async def get_item(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._get, key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)

    async def clear(self) -> None:
        await asyncio.to_thread(self._clear)
