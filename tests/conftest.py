from typing import Dict, List, Optional

import pytest
import requests
from requests.structures import CaseInsensitiveDict

import forum_mirror


class FakeResponse:
    def __init__(
        self,
        content: bytes = b"",
        content_type: Optional[str] = "text/html",
        status_code: int = 200,
        encoding: Optional[str] = None,
    ):
        self.content = content
        self.status_code = status_code
        self.headers = CaseInsensitiveDict()
        if content_type is not None:
            self.headers["Content-Type"] = content_type
        self.encoding = encoding
        self.closed = False

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i : i + chunk_size]

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Serves canned responses by URL and records every GET."""

    def __init__(self, routes: Dict[str, FakeResponse]):
        self.routes = routes
        self.requested: List[str] = []
        self.closed = False

    def get(self, url, timeout=None, stream=False):
        self.requested.append(url)
        if url not in self.routes:
            raise requests.ConnectionError(f"no route to {url}")
        return self.routes[url]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_context(tmp_path):
    def _make(routes, base_url="http://forum.example/topic", base_dir="/"):
        session = FakeSession(routes)
        cache = forum_mirror.ResourceCache(
            session, tmp_path / "forum.example", "forum.example"
        )
        context = forum_mirror.RewriteContext(
            base_url=base_url, base_dir=base_dir, host="forum.example", cache=cache
        )
        return context, session

    return _make


@pytest.fixture
def fake_web(monkeypatch):
    """Route every session built by the page task to one shared set of responses."""
    routes: Dict[str, FakeResponse] = {}
    sessions: List[FakeSession] = []

    def _build_session():
        s = FakeSession(routes)
        sessions.append(s)
        return s

    monkeypatch.setattr(forum_mirror, "build_session", _build_session)
    return routes, sessions
