"""Single-shot local HTTP listener for the OAuth redirect."""

from __future__ import annotations

import logging
import socket
import threading
import urllib.parse
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional

from pickify.config import CALLBACK_PATH, REDIRECT_HOST
from pickify.domain.errors import ListenerBindError
from pickify.domain.model import AuthorizationResponse

logger = logging.getLogger("pickify.auth.callback")

_POLL_INTERVAL = 0.2
_REQUEST_READ_TIMEOUT = 2.0
_JOIN_TIMEOUT = 1.0


class _CallbackHandler(BaseHTTPRequestHandler):
    server: "_CallbackHTTPServer"
    # idle connections (browser preconnects) give up instead of pinning a thread
    timeout = _REQUEST_READ_TIMEOUT

    def do_GET(self):
        parsed = urllib.parse.urlparse(self.path)
        if parsed.path != self.server.callback_path:
            self._respond(404, "Not found.")
            return

        query = urllib.parse.parse_qs(parsed.query)
        code = (query.get("code") or [None])[0]
        error = (query.get("error") or [None])[0]
        state = (query.get("state") or [None])[0]

        if not code and not error:
            self._respond(400, "Missing code query parameter.")
            return

        listener = self.server.listener
        if not listener._claim(AuthorizationResponse(code=code, state=state, error=error)):
            self._respond(410, "This login link was already used.")
        elif error:
            self._respond(400, f"Authorization failed: {error}")
        else:
            self._respond(200, "success!")
        listener._received.set()

    def _respond(self, status: int, body: str) -> None:
        payload = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        logger.debug("callback %s", format % args)


class _CallbackHTTPServer(ThreadingHTTPServer):
    daemon_threads = True
    block_on_close = False

    def __init__(self, address, family: int, listener: "CallbackListener", callback_path: str):
        self.address_family = family
        self.listener = listener
        self.callback_path = callback_path
        super().__init__(address, _CallbackHandler)


def _resolve(host: str, port: int) -> list[tuple[int, tuple[str, int]]]:
    """Addresses of ``host`` in the order a browser tries them."""
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except socket.gaierror as exc:
        raise ListenerBindError(f"Failed to resolve {host}: {exc}") from exc
    return [(family, (sockaddr[0], sockaddr[1])) for family, _, _, _, sockaddr in infos]


class CallbackListener:
    """Serve ``GET /callback`` until one code (or error) arrives.

    Each connection is handled on its own daemon thread, so a client that
    connects and sends nothing cannot hold up the real redirect. The server is
    closed exactly once: after the first captured callback, on timeout, or
    when the caller exits the context manager.
    """

    def __init__(self, port: int, host: str = REDIRECT_HOST, callback_path: str = CALLBACK_PATH):
        self.host = host
        self.requested_port = port
        self.callback_path = callback_path
        self.result: Optional[AuthorizationResponse] = None
        self._server: Optional[_CallbackHTTPServer] = None
        self._thread: Optional[threading.Thread] = None
        self._received = threading.Event()
        self._stop = threading.Event()
        self._result_lock = threading.Lock()
        self._close_lock = threading.Lock()
        self._closed = False

    @property
    def port(self) -> int:
        if self._server is None:
            return self.requested_port
        return self._server.server_address[1]

    def start(self) -> "CallbackListener":
        last_error: Optional[OSError] = None
        for family, address in _resolve(self.host, self.requested_port):
            try:
                self._server = _CallbackHTTPServer(address, family, self, self.callback_path)
                break
            except OSError as exc:
                logger.debug("Cannot listen on %s: %s", address[0], exc)
                last_error = exc
        if self._server is None:
            raise ListenerBindError(
                f"Failed to listen on {self.host}:{self.requested_port}: {last_error}"
            ) from last_error
        self._server.timeout = _POLL_INTERVAL
        self._thread = threading.Thread(target=self._serve, name="pickify-callback", daemon=True)
        self._thread.start()
        logger.info("Callback listener started on %s port %s", self._server.server_address[0], self.port)
        return self

    def _serve(self) -> None:
        while not self._stop.is_set() and not self._received.is_set():
            self._server.handle_request()

    def _claim(self, result: AuthorizationResponse) -> bool:
        """Record ``result`` unless an earlier callback already won."""
        with self._result_lock:
            if self.result is not None:
                return False
            self.result = result
            return True

    def wait(self, timeout: float) -> Optional[AuthorizationResponse]:
        """Block until a callback arrives or ``timeout`` seconds pass; always closes."""
        try:
            if self._received.wait(timeout):
                return self.result
            logger.warning("No callback received within %ss", timeout)
            return None
        finally:
            self.close()

    def close(self) -> None:
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(_JOIN_TIMEOUT)
            if self._thread.is_alive():
                logger.warning("Callback listener thread did not stop within %ss", _JOIN_TIMEOUT)
        if self._server is not None:
            self._server.server_close()
        logger.info("Callback listener closed")

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.close()
