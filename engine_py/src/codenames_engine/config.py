"""Process settings read from the environment"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .rules import RuleConfig, default_rules
from .storage import InMemoryRoomStorage, JsonFileRoomStorage, RoomStorage
from .store import RoomStateStore
from .words import DEFAULT_WORD_POOL, load_word_pool

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    log_level: str = "info"
    storage: str = "memory"  # memory|file
    data_dir: str = "./data/rooms"
    wordlist: Optional[str] = None


def load_settings() -> Settings:
    return Settings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 8000)),
        reload=os.getenv("RELOAD", "false").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
        storage=os.getenv("CODENAMES_STORAGE", "memory").lower(),
        data_dir=os.getenv("CODENAMES_DATA_DIR", "./data/rooms"),
        wordlist=os.getenv("CODENAMES_WORDLIST") or None,
    )


def build_storage(settings: Settings) -> RoomStorage:
    if settings.storage == "file":
        logger.info(f"Using JSON file storage in {settings.data_dir}")
        return JsonFileRoomStorage(settings.data_dir)
    if settings.storage != "memory":
        raise ValueError(f"Unknown CODENAMES_STORAGE backend: {settings.storage}")
    return InMemoryRoomStorage()


def build_store(settings: Optional[Settings] = None, rules: RuleConfig = default_rules) -> RoomStateStore:
    """Wire a RoomStateStore from environment settings."""
    settings = settings or load_settings()
    word_pool = load_word_pool(settings.wordlist) if settings.wordlist else DEFAULT_WORD_POOL
    return RoomStateStore(build_storage(settings), word_pool=word_pool, rules=rules)
