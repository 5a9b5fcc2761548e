"""
Seen-set stores.

ShuffleStack keeps the indices still to be dispensed in process memory.
GistSeenStore keeps the list of already dispensed terms in one file of a
GitHub gist and round-trips it on every request.
"""

import json
import random
import logging
from typing import List, Optional

import httpx

from .errors import CycleExhausted, RemoteStoreUnavailable, RemoteStoreWriteFailure

logger = logging.getLogger(__name__)

USER_AGENT = "wordcycle-vocabulary-service"


class ShuffleStack:
    """Shuffled stack of vocabulary indices not yet dispensed this cycle."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._indices: List[int] = []
        self.size = 0

    def initialize(self, vocab_len: int) -> None:
        """Refill with a uniformly random permutation of range(vocab_len).

        Fisher-Yates: walk from the last slot down, swapping slot i with a
        slot drawn uniformly from [0, i].
        """
        indices = list(range(vocab_len))
        for i in range(len(indices) - 1, 0, -1):
            j = self._rng.randint(0, i)
            indices[i], indices[j] = indices[j], indices[i]
        self._indices = indices
        self.size = vocab_len

    def take_next(self) -> int:
        if not self._indices:
            raise CycleExhausted("Shuffle stack is empty")
        return self._indices.pop()

    def remaining(self) -> int:
        return len(self._indices)


class GistSeenStore:
    """Seen-set persisted as a JSON list inside one file of a GitHub gist."""

    def __init__(
        self,
        gist_id: str,
        token: Optional[str] = None,
        filename: str = "seen_words.json",
        api_url: str = "https://api.github.com",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.gist_id = gist_id
        self.filename = filename
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._token = token
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.api_url}/gists/{self.gist_id}"

    def describe(self) -> str:
        return f"gist {self.gist_id} ({self.filename})"

    def _headers(self) -> dict:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout, headers=self._headers(), transport=self._transport
        )

    async def fetch_seen(self) -> List[str]:
        """Fetch and parse the seen list. Raises RemoteStoreUnavailable."""
        try:
            async with self._client() as client:
                r = await client.get(self.url)
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise RemoteStoreUnavailable(f"Failed to fetch {self.describe()}: {e}") from e

        try:
            content = data["files"][self.filename]["content"]
            terms = json.loads(content)
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteStoreUnavailable(
                f"{self.describe()} has no readable term list: {e!r}"
            ) from e
        if not isinstance(terms, list) or not all(isinstance(t, str) for t in terms):
            raise RemoteStoreUnavailable(f"{self.describe()} content is not a list of terms")
        return terms

    async def read_seen(self) -> List[str]:
        """Seen terms in dispense order; empty list if the store can't be read."""
        try:
            terms = await self.fetch_seen()
        except RemoteStoreUnavailable as e:
            logger.warning(f"Seen-set read failed, assuming a fresh cycle: {e}")
            return []
        return list(dict.fromkeys(terms))

    async def write_seen(self, terms: List[str]) -> None:
        """Replace the seen list. Raises RemoteStoreWriteFailure."""
        body = {"files": {self.filename: {"content": json.dumps(terms, ensure_ascii=False)}}}
        try:
            async with self._client() as client:
                r = await client.patch(self.url, json=body)
                r.raise_for_status()
        except httpx.HTTPError as e:
            raise RemoteStoreWriteFailure(f"Failed to update {self.describe()}: {e}") from e
        logger.debug(f"Persisted {len(terms)} seen term(s) to {self.describe()}")
