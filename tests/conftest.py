import json
import os

import httpx
import pytest

from wordcycle.seen_store import GistSeenStore
from wordcycle.vocabulary import VocabularySource

# keep test runs from writing log files
os.environ.setdefault("LOG_FILE", "")


def write_vocab(path, terms, **extra):
    entries = [dict({"term": t}, **extra) for t in terms]
    path.write_text(json.dumps(entries), encoding="utf-8")
    return path


@pytest.fixture
def make_source(tmp_path):
    def _make(terms):
        source = VocabularySource(write_vocab(tmp_path / "words.json", terms))
        source.reload()
        return source
    return _make


class FakeGist:
    """In-memory stand-in for the GitHub gist API."""

    def __init__(self, seen=None, filename="seen_words.json"):
        self.filename = filename
        self.content = json.dumps(seen) if seen is not None else None
        self.fail_reads = False
        self.fail_writes = False
        self.requests = []

    @property
    def seen(self):
        return json.loads(self.content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET":
            if self.fail_reads:
                raise httpx.ConnectError("connection refused", request=request)
            files = {}
            if self.content is not None:
                files[self.filename] = {"filename": self.filename, "content": self.content}
            return httpx.Response(200, json={"id": "abc123", "files": files})
        if request.method == "PATCH":
            if self.fail_writes:
                return httpx.Response(403, json={"message": "Forbidden"})
            body = json.loads(request.content)
            self.content = body["files"][self.filename]["content"]
            return httpx.Response(200, json={"id": "abc123"})
        return httpx.Response(405)


@pytest.fixture
def fake_gist():
    return FakeGist()


@pytest.fixture
def gist_store(fake_gist):
    return GistSeenStore(
        "abc123",
        token="test-token",
        api_url="https://gist.test",
        transport=httpx.MockTransport(fake_gist.handler),
    )
