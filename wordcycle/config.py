import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv, find_dotenv

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_PORT = 3000
DEFAULT_VOCAB_FILE = "words_output.json"
DEFAULT_GIST_FILENAME = "seen_words.json"
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_REMOTE_TIMEOUT = 10.0

STORE_MEMORY = "memory"
STORE_GIST = "gist"


def load_env() -> str:
    """Load a shared .env (searched from cwd upward). Existing env vars win."""
    env_path = find_dotenv(usecwd=True)
    if not env_path:
        candidate = PROJECT_ROOT / ".env"
        env_path = str(candidate) if candidate.exists() else ""
    if env_path:
        load_dotenv(env_path, override=False)
    return env_path


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        logger.warning("Invalid %s=%r; using %s", name, os.getenv(name), default)
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        logger.warning("Invalid %s=%r; using %s", name, os.getenv(name), default)
        return default


def _env_str(name: str) -> Optional[str]:
    value = (os.getenv(name) or "").strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    host: str = "0.0.0.0"
    vocab_file: Path = PROJECT_ROOT / DEFAULT_VOCAB_FILE
    seen_store: Optional[str] = None
    gist_id: Optional[str] = None
    github_token: Optional[str] = None
    gist_filename: str = DEFAULT_GIST_FILENAME
    github_api_url: str = DEFAULT_GITHUB_API_URL
    remote_timeout: float = DEFAULT_REMOTE_TIMEOUT

    @classmethod
    def from_env(cls) -> "Settings":
        vocab_file = Path(os.getenv("VOCAB_FILE", DEFAULT_VOCAB_FILE))
        if not vocab_file.is_absolute():
            vocab_file = PROJECT_ROOT / vocab_file
        seen_store = (_env_str("SEEN_STORE") or "").lower() or None
        if seen_store not in (None, STORE_MEMORY, STORE_GIST):
            logger.warning("Unknown SEEN_STORE=%r; choosing from GIST_ID", seen_store)
            seen_store = None
        return cls(
            port=_env_int("PORT", DEFAULT_PORT),
            host=_env_str("HOST") or "0.0.0.0",
            vocab_file=vocab_file,
            seen_store=seen_store,
            gist_id=_env_str("GIST_ID"),
            github_token=_env_str("GITHUB_TOKEN"),
            gist_filename=_env_str("GIST_FILENAME") or DEFAULT_GIST_FILENAME,
            github_api_url=(_env_str("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL).rstrip("/"),
            remote_timeout=_env_float("REMOTE_TIMEOUT", DEFAULT_REMOTE_TIMEOUT),
        )

    @property
    def store_kind(self) -> str:
        if self.seen_store:
            return self.seen_store
        return STORE_GIST if self.gist_id else STORE_MEMORY

    @property
    def uses_remote_store(self) -> bool:
        return self.store_kind == STORE_GIST
