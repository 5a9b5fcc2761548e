"""
Logging setup for the vocabulary cycle service.
Level comes from LOG_LEVEL, file output from LOG_FILE.
"""

import os
import logging
from pathlib import Path

from .config import PROJECT_ROOT


def _log_file() -> Path | None:
    raw = os.getenv('LOG_FILE', 'logs/wordcycle.log').strip()
    if not raw:
        return None
    path = Path(raw)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        # read-only deployments still get console logging
        return None
    return path


def setup_logging() -> int:
    """Configure the root logger. Returns the effective level."""
    level_name = os.getenv('LOG_LEVEL', 'INFO').strip().upper()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_file = _log_file()
    if log_file is not None:
        try:
            handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
        except OSError:
            # unwritable log dir: console only
            pass

    # Force reconfigure so uvicorn's defaults don't swallow our records
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )
    logging.getLogger('wordcycle').setLevel(level)
    return level


