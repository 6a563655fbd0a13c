from __future__ import annotations

import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Iterator, List, Tuple

import httpx
import pytest

from api_mocker.client import Client

_PROXY_VARS = ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy")


class FakeServer:
    """Scripted mock server answering through httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.status = 200
        self.body = b""

    def reply(self, status: int, body: str | bytes = b"") -> None:
        self.status = status
        self.body = body.encode("utf-8") if isinstance(body, str) else body

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return httpx.Response(self.status, content=self.body)

    def client(self, base_path: str = "http://mock.test") -> Client:
        return Client(base_path, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_server() -> FakeServer:
    return FakeServer()


class _RecordingHandler(BaseHTTPRequestHandler):
    def _handle(self) -> None:
        length = int(self.headers.get("content-length") or 0)
        body = self.rfile.read(length) if length else b""
        self.server.seen.append(  # type: ignore[attr-defined]
            {
                "method": self.command,
                "path": self.path,
                "content_type": self.headers.get("content-type"),
                "body": body,
            }
        )
        status, payload = self.server.routes.get(self.command, (404, b""))  # type: ignore[attr-defined]
        self.send_response(status)
        self.send_header("content-length", str(len(payload)))
        self.end_headers()
        if payload:
            self.wfile.write(payload)

    do_GET = _handle
    do_POST = _handle
    do_DELETE = _handle

    def log_message(self, *_args: Any) -> None:
        return None


@pytest.fixture
def live_server(monkeypatch: pytest.MonkeyPatch) -> Iterator[ThreadingHTTPServer]:
    for var in _PROXY_VARS:
        monkeypatch.delenv(var, raising=False)

    server = ThreadingHTTPServer(("127.0.0.1", 0), _RecordingHandler)
    server.seen = []  # type: ignore[attr-defined]
    routes: Dict[str, Tuple[int, bytes]] = {
        "GET": (200, b'{"expected":[],"unexpected":[]}'),
        "POST": (201, b""),
        "DELETE": (204, b""),
    }
    server.routes = routes  # type: ignore[attr-defined]
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def live_url(live_server: ThreadingHTTPServer) -> str:
    host, port = live_server.server_address[:2]
    return f"http://{host}:{port}"
