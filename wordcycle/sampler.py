import random
import logging
import threading
from dataclasses import dataclass
from typing import Optional

from .config import Settings, STORE_GIST
from .errors import CycleExhausted, NoData, RemoteStoreWriteFailure
from .seen_store import GistSeenStore, ShuffleStack
from .vocabulary import VocabularyEntry, VocabularySource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Draw:
    entry: VocabularyEntry
    remaining: int


class CycleSampler:
    """Hands out vocabulary entries without repeats until a cycle completes.

    Subclasses decide where the cycle state lives. Every call to next() on a
    non-empty vocabulary returns exactly one entry; exhaustion resets the
    cycle inline.
    """

    def __init__(self, source: VocabularySource):
        self.source = source

    async def next(self) -> Draw:
        raise NotImplementedError

    def reset(self) -> None:
        """Called after the vocabulary has been reloaded."""

    def _require_vocabulary(self):
        vocabulary = self.source.entries
        if not vocabulary:
            raise NoData("Vocabulary is empty; check the dataset file")
        return vocabulary


class ShuffleSampler(CycleSampler):
    """In-memory variant: pops from a shuffled stack of indices."""

    def __init__(self, source: VocabularySource, stack: Optional[ShuffleStack] = None):
        super().__init__(source)
        self.stack = stack or ShuffleStack()
        self._lock = threading.Lock()
        self.cycles = 0
        if source.entries:
            self.stack.initialize(len(source.entries))

    def draw(self) -> Draw:
        with self._lock:
            vocabulary = self._require_vocabulary()
            if self.stack.size != len(vocabulary):
                self.stack.initialize(len(vocabulary))
            try:
                index = self.stack.take_next()
            except CycleExhausted:
                self.cycles += 1
                logger.info(f"Cycle {self.cycles} complete. Reshuffling {len(vocabulary)} entries...")
                self.stack.initialize(len(vocabulary))
                index = self.stack.take_next()
            remaining = self.stack.remaining()
        return Draw(dict(vocabulary[index]), remaining)

    async def next(self) -> Draw:
        return self.draw()

    def reset(self) -> None:
        with self._lock:
            self.stack.initialize(len(self.source.entries))


class SeenSetSampler(CycleSampler):
    """Remote variant: filters the vocabulary by a persisted seen-set.

    read-compute-write is not atomic across requests; two concurrent calls can
    dispense the same entry or overwrite each other's update.
    """

    def __init__(
        self,
        source: VocabularySource,
        store: GistSeenStore,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(source)
        self.store = store
        self._rng = rng or random.Random()

    async def next(self) -> Draw:
        vocabulary = self._require_vocabulary()
        seen = await self.store.read_seen()
        seen_terms = set(seen)
        available = [e for e in vocabulary if e["term"] not in seen_terms]

        if not available:
            logger.info(f"Cycle complete ({len(seen)} seen). Resetting seen-set in {self.store.describe()}")
            seen = []
            available = list(vocabulary)

        entry = self._rng.choice(available)
        seen.append(entry["term"])
        try:
            await self.store.write_seen(seen)
        except RemoteStoreWriteFailure as e:
            logger.error(f"Seen-set not persisted, '{entry['term']}' may repeat: {e}")
        return Draw(dict(entry), len(available) - 1)


def build_sampler(settings: Settings, source: VocabularySource) -> CycleSampler:
    if settings.store_kind == STORE_GIST:
        if not settings.gist_id:
            logger.error("SEEN_STORE=gist but GIST_ID is not set; using in-memory shuffle")
            return ShuffleSampler(source)
        if not settings.github_token:
            logger.warning("GITHUB_TOKEN not set; seen-set updates will be rejected by the gist API")
        store = GistSeenStore(
            settings.gist_id,
            token=settings.github_token,
            filename=settings.gist_filename,
            api_url=settings.github_api_url,
            timeout=settings.remote_timeout,
        )
        logger.info(f"Using remote seen-set store: {store.describe()}")
        return SeenSetSampler(source, store)
    logger.info("Using in-memory shuffle stack")
    return ShuffleSampler(source)
