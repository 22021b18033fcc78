import importlib # Needed for reloading
import sys
import types
from pathlib import Path
from typing import Any, AsyncGenerator, Callable, List, Optional

import httpx
import pytest
import pytest_asyncio
from pytest import MonkeyPatch

# Ensure the package can be imported without installation
ROOT_DIR = Path(__file__).parent.parent.parent
sys.path.insert(0, str(ROOT_DIR))

from mcp_solana_tracker.dispatcher import Dispatcher

TEST_API_KEY = "test-api-key"
TEST_BASE_URL = "https://tracker.test"


class MockUpstream:
    """Records every outbound request and answers with a configurable response."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.json_body: Any = {}
        self.content: Optional[bytes] = None
        self.error: Optional[Exception] = None

    def respond(self, status_code: int = 200, json_body: Any = None, content: Optional[bytes] = None):
        self.status_code = status_code
        self.json_body = json_body
        self.content = content

    def fail_with(self, error: Exception):
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "No request reached the upstream"
        return self.requests[-1]


# --- Upstream Fixtures ---

@pytest.fixture(scope="function")
def upstream() -> MockUpstream:
    return MockUpstream()


@pytest.fixture(scope="function")
def client_factory(upstream: MockUpstream) -> Callable[[], httpx.AsyncClient]:
    def make_client() -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=TEST_BASE_URL,
            headers={"x-api-key": TEST_API_KEY},
            transport=httpx.MockTransport(upstream.handler),
        )
    return make_client


@pytest_asyncio.fixture(scope="function")
async def dispatcher(client_factory) -> AsyncGenerator[Dispatcher, None]:
    instance = Dispatcher(client_factory())
    yield instance
    await instance.aclose()

# --- Patched Server Module Fixture ---

@pytest_asyncio.fixture(scope="function")
async def patched_server_module(
    monkeypatch: MonkeyPatch, client_factory
) -> AsyncGenerator[types.ModuleType, None]:
    """
    Reloads the server module with a test API key in the environment and a
    dispatcher bound to the mock upstream, so every test starts clean.
    """
    monkeypatch.setenv("SOLANA_TRACKER_API_KEY", TEST_API_KEY)
    monkeypatch.setenv("SOLANA_TRACKER_BASE_URL", TEST_BASE_URL)

    import mcp_solana_tracker.server
    reloaded_server = importlib.reload(mcp_solana_tracker.server)
    reloaded_server.dispatcher = Dispatcher(client_factory())

    yield reloaded_server

    if reloaded_server.dispatcher is not None:
        await reloaded_server.dispatcher.aclose()
    reloaded_server.dispatcher = None
