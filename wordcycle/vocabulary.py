import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from .errors import DataUnavailable

logger = logging.getLogger(__name__)

VocabularyEntry = Dict[str, Any]
Vocabulary = Tuple[VocabularyEntry, ...]


def is_valid_entry(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    term = item.get("term")
    return isinstance(term, str) and bool(term.strip())


class VocabularySource:
    """Owns the dataset path and the vocabulary currently being served.

    The vocabulary is a tuple that is only ever replaced as a whole, so readers
    always see either the old or the new list, never a mix.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._entries: Vocabulary = ()

    @property
    def entries(self) -> Vocabulary:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> Vocabulary:
        """Read and parse the dataset. Raises DataUnavailable on any failure."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise DataUnavailable(f"Vocabulary file not found: {self.path}") from e
        except OSError as e:
            raise DataUnavailable(f"Vocabulary file unreadable: {self.path}: {e}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DataUnavailable(f"Vocabulary file is not valid JSON: {self.path}: {e}") from e

        if not isinstance(data, list):
            raise DataUnavailable(
                f"Vocabulary file must hold a JSON array, got {type(data).__name__}"
            )

        entries = tuple(dict(item) for item in data if is_valid_entry(item))
        skipped = len(data) - len(entries)
        if skipped:
            logger.warning(f"Skipped {skipped} vocabulary item(s) without a 'term' field")

        dupes = [t for t, n in Counter(e["term"] for e in entries).items() if n > 1]
        if dupes:
            logger.warning(
                f"Vocabulary has {len(dupes)} duplicate term(s), e.g. {dupes[:5]}; "
                "duplicates share one seen-set slot in the remote store"
            )
        return entries

    def reload(self) -> int:
        """Swap in a freshly loaded vocabulary. Keeps the old one on failure."""
        entries = self.load()
        self._entries = entries
        logger.info(f"Vocabulary loaded: {len(entries)} entries from {self.path}")
        return len(entries)
