import json
import logging
import socket
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout

import requests

log = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; Distractions/1.0)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

# Hard bound for every outbound call, connect through last byte.
FETCH_TIMEOUT = 5
MAX_BODY_BYTES = 2 * 1024 * 1024
CHUNK_SIZE = 16 * 1024

# requests only times out individual socket reads, so the whole GET runs
# here and the caller stops waiting at the deadline.
_fetch_pool = ThreadPoolExecutor(max_workers=32, thread_name_prefix="unfurl-fetch")


def _read_body(resp: requests.Response, deadline: float) -> bytes:
    chunks, size = [], 0
    for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
        if time.monotonic() > deadline:
            raise requests.Timeout(f"deadline exceeded reading {resp.url}")
        chunks.append(chunk)
        size += len(chunk)
        if size >= MAX_BODY_BYTES:
            break
    return b"".join(chunks)


def _get(url: str, headers: dict, timeout: float, deadline: float, opened: list) -> bytes | None:
    with requests.get(
        url,
        headers=headers,
        timeout=(timeout, timeout),
        stream=True,
        allow_redirects=True,
    ) as resp:
        opened.append(resp)
        if not resp.ok:
            log.debug("GET %s -> %s", url, resp.status_code)
            return None
        return _read_body(resp, deadline)


def _abort(resp: requests.Response) -> None:
    # unblock the worker thread still sitting in recv()
    conn = getattr(resp.raw, "connection", None) or getattr(resp.raw, "_connection", None)
    sock = getattr(conn, "sock", None)
    if sock is None:
        return
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError as e:
        log.debug("socket already closed for %s: %s", resp.url, e)


def get_body(url: str, headers: dict | None = None) -> bytes | None:
    """GET ``url`` and return the raw body, or None for any failure.

    Timeouts, connection errors and non-2xx statuses all come back as
    None; callers treat that as "no data". Never waits past FETCH_TIMEOUT.
    """
    timeout = FETCH_TIMEOUT
    deadline = time.monotonic() + timeout
    opened = []
    future = _fetch_pool.submit(
        _get, url, {**HEADERS, **(headers or {})}, timeout, deadline, opened,
    )
    try:
        return future.result(timeout=timeout)
    except FutureTimeout:
        log.debug("GET %s gave up after %ss", url, timeout)
        future.cancel()
        for resp in opened:
            _abort(resp)
        return None
    except requests.RequestException as e:
        log.debug("GET %s failed: %s", url, e)
        return None


def get_json(url: str, headers: dict | None = None) -> dict | None:
    body = get_body(url, {"Accept": "application/json", **(headers or {})})
    if body is None:
        return None
    try:
        data = json.loads(body)
    except ValueError as e:
        log.debug("GET %s returned invalid JSON: %s", url, e)
        return None
    return data if isinstance(data, dict) else None
