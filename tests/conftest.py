"""Shared pytest fixtures and test helpers for zuora tests."""

from __future__ import annotations

import logging
import re
import threading
from collections import defaultdict
from collections.abc import Generator
from pathlib import Path
from xml.etree import ElementTree
from xml.etree.ElementTree import Element

import httpx
import pytest
import structlog
from click.testing import CliRunner

from zuora.client import ZuoraClient
from zuora.config.settings import ZuoraSettings
from zuora.infrastructure.transport import PRODUCTION_ENDPOINT, HttpTransport
from zuora.services.telemetry import disable_telemetry
from zuora.wire.namespaces import PREFIXES

FIXTURES = Path(__file__).parent / "fixtures" / "responses"

# Prefix map for ElementTree ``find``/``findall`` paths.
NS = dict(PREFIXES)

_ACTION = re.compile(r'action="(?P<op>[^"]+)"')


def load_fixture(name: str) -> bytes:
    return (FIXTURES / f"{name}.xml").read_bytes()


class FakeZuora:
    """Serve canned SOAP replies per operation and record every request.

    ``login`` answers with ``login_success`` unless a reply is queued.
    Any other operation without a queued reply fails the test.
    """

    def __init__(self) -> None:
        self.replies: dict[str, list[tuple[int, bytes]]] = defaultdict(list)
        self.requests: list[httpx.Request] = []
        self._lock = threading.Lock()

    def reply(self, operation: str, fixture: str, *, status: int = 200) -> FakeZuora:
        self.replies[operation].append((status, load_fixture(fixture)))
        return self

    def fault(self, operation: str, fixture: str) -> FakeZuora:
        return self.reply(operation, fixture, status=500)

    @property
    def operations(self) -> list[str]:
        return [_operation(r) for r in self.requests]

    def count(self, operation: str) -> int:
        return self.operations.count(operation)

    def sent(self, operation: str) -> list[Element]:
        """Parsed envelopes sent for *operation*, oldest first."""
        return [
            ElementTree.fromstring(r.content) for r in self.requests if _operation(r) == operation
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        operation = _operation(request)
        with self._lock:
            self.requests.append(request)
            queue = self.replies.get(operation)
            reply = queue.pop(0) if queue else None
        if reply is not None:
            status, content = reply
        elif operation == "login":
            status, content = 200, load_fixture("login_success")
        else:
            raise AssertionError(f"unexpected {operation} call")
        return httpx.Response(
            status, content=content, headers={"Content-Type": "application/soap+xml"}
        )


def _operation(request: httpx.Request) -> str:
    match = _ACTION.search(request.headers.get("Content-Type", ""))
    return match.group("op") if match else ""


def mock_transport(server: FakeZuora, endpoint: str = PRODUCTION_ENDPOINT, **_: object) -> HttpTransport:
    return HttpTransport(endpoint, http_client=httpx.Client(transport=httpx.MockTransport(server)))


def request_xml(client: ZuoraClient) -> Element:
    """The last transmitted envelope, parsed."""
    assert client.last_request is not None
    return ElementTree.fromstring(client.last_request)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None]:
    """Keep ambient ZUORA_* variables and zuora.toml files out of tests."""
    for name in ("ZUORA_CONFIG", "ZUORA_USERNAME", "ZUORA_PASSWORD", "ZUORA_SANDBOX"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def server() -> FakeZuora:
    return FakeZuora()


@pytest.fixture
def settings() -> ZuoraSettings:
    return ZuoraSettings(username="api@example.com", password="s3cret")


@pytest.fixture
def client(server: FakeZuora, settings: ZuoraSettings) -> Generator[ZuoraClient]:
    """Client wired to the fake server."""
    c = ZuoraClient(settings, transport=mock_transport(server))
    try:
        yield c
    finally:
        c.close()


@pytest.fixture
def cli_server(server: FakeZuora, monkeypatch: pytest.MonkeyPatch) -> FakeZuora:
    """Route CLI-created clients to the fake server with env credentials."""
    monkeypatch.setenv("ZUORA_USERNAME", "api@example.com")
    monkeypatch.setenv("ZUORA_PASSWORD", "s3cret")
    monkeypatch.setattr(
        "zuora.client.HttpTransport",
        lambda endpoint, **kwargs: mock_transport(server, endpoint, **kwargs),
    )
    return server
