import json
from typing import Any

import httpx
import pytest

from spotify_mcp.services.spotify import SpotifyService

BASE_URL = "https://api.spotify.com/v1"


class SpotifySpy:
    """Fake Spotify API that records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], tuple[int, Any]] = {}

    def route(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self._routes[(method, f"/v1/{path}")] = (status, body)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self._routes.get((request.method, request.url.path), (200, {}))
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def spy():
    return SpotifySpy()


@pytest.fixture
def service(spy):
    return SpotifyService(base_url=BASE_URL, transport=spy.transport)
