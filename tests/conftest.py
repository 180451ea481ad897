import asyncio
import sys
from pathlib import Path

import pytest

# Ensure pytest-asyncio plugin is loaded so @pytest.mark.asyncio works with pytest>=9.
pytest_plugins = ["pytest_asyncio"]


# Ensure project root is on sys.path for local test runs without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from courier.models import HttpResponse, RequestSpec  # noqa: E402


class _FakeHeaders:
    def __init__(self, pairs: list[tuple[str, str]]) -> None:
        self.pairs = pairs

    def multi_items(self) -> list[tuple[str, str]]:
        return list(self.pairs)


class _FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "{}", headers=None) -> None:
        self.status_code = status_code
        self.text = text
        self.headers = _FakeHeaders(headers or [("content-type", "application/json")])


class FakeHttpxClient:
    def __init__(self, response: _FakeResponse | None = None) -> None:
        self.requests: list[dict] = []
        self.response = response or _FakeResponse()
        self.error: Exception | None = None

    async def request(self, method: str, url: str, params=None, headers=None, content=None):
        self.requests.append(
            {"method": method, "url": url, "params": params, "headers": headers, "content": content}
        )
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_httpx_client():
    return FakeHttpxClient()


@pytest.fixture
def fake_client_factory(fake_httpx_client):
    async def factory():
        return fake_httpx_client

    return factory


class GatedExecutor:
    """Stand-in for perform_http_request whose calls finish only when released."""

    def __init__(self) -> None:
        self.calls: list[RequestSpec] = []
        self._gates: list[asyncio.Event] = []
        self._responses: list[HttpResponse] = []

    async def __call__(self, spec: RequestSpec, timeout: float = 30.0, verify_tls: bool = True) -> HttpResponse:
        gate = asyncio.Event()
        index = len(self.calls)
        self.calls.append(spec)
        self._gates.append(gate)
        self._responses.append(HttpResponse(status=200, headers=(), body=f"response {index}", elapsed_ms=1.0))
        await gate.wait()
        return self._responses[index]

    def release(self, index: int, status: int = 200, body: str | None = None) -> None:
        current = self._responses[index]
        self._responses[index] = HttpResponse(
            status=status,
            headers=current.headers,
            body=current.body if body is None else body,
            elapsed_ms=current.elapsed_ms,
        )
        self._gates[index].set()


@pytest.fixture
def gated_executor():
    return GatedExecutor()


@pytest.fixture
def settle():
    """Let spawned request tasks run until they block or finish."""

    async def _settle(rounds: int = 5) -> None:
        for _ in range(rounds):
            await asyncio.sleep(0)

    return _settle
