# tests/conftest.py
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from unfurl.cache_utils import brand_icon_cache


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        path = self.path.split("?")[0]
        self.server.requests.append(self.path)
        status, body, delay = self.server.routes.get(path, (404, b"not found", 0))
        if delay:
            time.sleep(delay)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *args):
        pass


class PageServer:
    """Tiny local site: ``add(path, body, status=200, delay=0)``."""

    def __init__(self):
        self.httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
        self.httpd.daemon_threads = True
        self.httpd.routes = {}
        self.httpd.requests = []
        # the client hangs up on slow routes; don't print the broken pipe
        self.httpd.handle_error = lambda *a: None
        self.thread = threading.Thread(target=self.httpd.serve_forever, daemon=True)

    @property
    def base(self):
        host, port = self.httpd.server_address[:2]
        return f"http://{host}:{port}"

    def url(self, path):
        return self.base + path

    def add(self, path, body, status=200, delay=0):
        self.httpd.routes[path] = (status, body, delay)
        return self.url(path)

    @property
    def requests(self):
        return self.httpd.requests


@pytest.fixture
def page_server():
    server = PageServer()
    server.thread.start()
    yield server
    server.httpd.shutdown()
    server.httpd.server_close()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    # no proxies between requests and the local server, no real API key
    for k in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(k, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.delenv("BRANDFETCH_API_KEY", raising=False)
    brand_icon_cache.clear()
    yield
    brand_icon_cache.clear()


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_json(monkeypatch):
    """
    Replace http_utils.get_json with canned responses.
    Usage:
      calls = fake_json({"https://api...": {...}})
      # or fake_json(lambda url, headers=None: {...})
    Returns the list of (url, headers) calls made.
    """
    from unfurl import http_utils

    def _apply(responses):
        calls = []

        def fake(url, headers=None):
            calls.append((url, headers))
            if callable(responses):
                return responses(url, headers)
            return responses.get(url)

        monkeypatch.setattr(http_utils, "get_json", fake)
        return calls
    return _apply
