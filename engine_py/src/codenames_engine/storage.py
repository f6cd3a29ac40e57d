"""
Room storage adapters.

The store only needs a key-value map from room code to RoomState that supports
insert-if-absent and a version-checked write. Adapters hand out independent
copies so callers can never mutate stored state in place.
"""

import copy
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

import orjson

from .models import RoomState
from .serialization import room_from_dict, room_to_dict

logger = logging.getLogger(__name__)


class RoomStorage(ABC):
    """Abstract persistence capability used by RoomStateStore."""

    @abstractmethod
    def get(self, code: str) -> Optional[RoomState]:
        """Return a copy of the stored room, or None."""
        pass

    @abstractmethod
    def create(self, state: RoomState) -> bool:
        """
        Insert a new room.

        Returns:
            False if a room with the same code already exists
        """
        pass

    @abstractmethod
    def compare_and_set(self, state: RoomState, expected_version: int) -> bool:
        """
        Write `state` only if the stored version still equals `expected_version`.

        Returns:
            True if the write happened, False on a version conflict
        """
        pass

    @abstractmethod
    def codes(self) -> List[str]:
        """Codes of all stored rooms."""
        pass

    def exists(self, code: str) -> bool:
        return self.get(code) is not None


class InMemoryRoomStorage(RoomStorage):
    """Process-local storage; the reference adapter."""

    def __init__(self):
        self._rooms: Dict[str, RoomState] = {}
        self._lock = threading.Lock()

    def get(self, code: str) -> Optional[RoomState]:
        with self._lock:
            state = self._rooms.get(code)
            return copy.deepcopy(state) if state is not None else None

    def create(self, state: RoomState) -> bool:
        with self._lock:
            if state.code in self._rooms:
                return False
            self._rooms[state.code] = copy.deepcopy(state)
            return True

    def compare_and_set(self, state: RoomState, expected_version: int) -> bool:
        with self._lock:
            current = self._rooms.get(state.code)
            if current is None or current.version != expected_version:
                return False
            self._rooms[state.code] = copy.deepcopy(state)
            return True

    def codes(self) -> List[str]:
        with self._lock:
            return list(self._rooms.keys())

    def exists(self, code: str) -> bool:
        with self._lock:
            return code in self._rooms


class JsonFileRoomStorage(RoomStorage):
    """
    Persists each room as `<data_dir>/<CODE>.json`.

    Writes go to a temporary file that is renamed over the old document, so
    readers never observe a half-written room. The version check and the
    rename happen under one lock, which serializes writers in this process.
    """

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, code: str) -> Path:
        return self.data_dir / f"{code}.json"

    def _read(self, code: str) -> Optional[RoomState]:
        path = self._path(code)
        if not path.exists():
            return None
        return room_from_dict(orjson.loads(path.read_bytes()))

    def _write(self, state: RoomState):
        payload = orjson.dumps(room_to_dict(state), option=orjson.OPT_INDENT_2)
        fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix=f".{state.code}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_path, self._path(state.code))
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get(self, code: str) -> Optional[RoomState]:
        with self._lock:
            return self._read(code)

    def create(self, state: RoomState) -> bool:
        with self._lock:
            if self._path(state.code).exists():
                return False
            self._write(state)
            logger.debug(f"Persisted new room {state.code} to {self.data_dir}")
            return True

    def compare_and_set(self, state: RoomState, expected_version: int) -> bool:
        with self._lock:
            current = self._read(state.code)
            if current is None or current.version != expected_version:
                return False
            self._write(state)
            return True

    def codes(self) -> List[str]:
        with self._lock:
            return sorted(p.stem for p in self.data_dir.glob("*.json"))

    def exists(self, code: str) -> bool:
        with self._lock:
            return self._path(code).exists()
