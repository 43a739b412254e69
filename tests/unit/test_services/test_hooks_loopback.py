"""
Trace Hook Tests Against a Local HTTP Server

Runs real httpx clients (and their httpcore connection pools) against a
loopback server, so event names and reuse detection are checked end to end.
"""

import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import httpx
import pytest

from httpstat.services.hooks import attach, attach_async


class LoopbackHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"

    def do_GET(self):
        if self.path == "/redirect":
            self.send_response(302)
            self.send_header("Location", "/ok")
            self.send_header("Content-Length", "0")
            self.end_headers()
            return
        body = b"ok"
        self.send_response(200)
        self.send_header("Content-Type", "text/plain")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def base_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), LoopbackHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


def assert_fresh(record, address):
    assert record.reused is False
    assert record.address == address
    assert record.connect_start is not None
    assert record.connect_end is not None
    assert record.request_written is not None
    assert record.first_byte_received is not None
    assert record.start <= record.connect_start <= record.connect_end
    assert record.connect_end <= record.request_written <= record.first_byte_received


def assert_reused(record, address):
    assert record.reused is True
    assert record.address == address
    assert record.connect_start is None
    assert record.request_written is not None
    assert record.first_byte_received is not None


def test_sync_client_fresh_reused_and_redirect(base_url):
    address = base_url.removeprefix("http://")

    with httpx.Client(follow_redirects=True, trust_env=False) as client:
        fresh, reused, redirected = [], [], []
        client.get(f"{base_url}/ok", extensions=attach({}, fresh))
        client.get(f"{base_url}/ok", extensions=attach({}, reused))
        response = client.get(f"{base_url}/redirect", extensions=attach({}, redirected))

    assert len(fresh) == 1
    assert_fresh(fresh[0], address)
    assert len(reused) == 1
    assert_reused(reused[0], address)
    assert response.text == "ok"
    assert len(redirected) == 2
    assert redirected[0] is not redirected[1]


@pytest.mark.asyncio
async def test_async_client_fresh_reused_and_redirect(base_url):
    address = base_url.removeprefix("http://")

    async with httpx.AsyncClient(follow_redirects=True, trust_env=False) as client:
        fresh, reused, redirected = [], [], []
        await client.get(f"{base_url}/ok", extensions=attach_async({}, fresh))
        await client.get(f"{base_url}/ok", extensions=attach_async({}, reused))
        response = await client.get(f"{base_url}/redirect", extensions=attach_async({}, redirected))

    assert len(fresh) == 1
    assert_fresh(fresh[0], address)
    assert len(reused) == 1
    assert_reused(reused[0], address)
    assert response.text == "ok"
    assert len(redirected) == 2
