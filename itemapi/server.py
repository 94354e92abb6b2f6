"""HTTP server that serves the item API."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from collections.abc import Sequence
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any

from itemapi.handlers import ItemApi, Request
from itemapi.router import Router, build_router

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000
POLL_INTERVAL = 0.5


class _ApiServer(HTTPServer):
    def __init__(
        self,
        address: tuple[str, int],
        handler: type[BaseHTTPRequestHandler],
        router: Router,
    ) -> None:
        self.router = router
        super().__init__(address, handler)
        self.timeout = POLL_INTERVAL


class ApiRequestHandler(BaseHTTPRequestHandler):
    """Turns HTTP requests into router dispatches and writes the responses."""

    server_version = "itemapi"

    def do_GET(self) -> None:
        self._dispatch()

    def do_POST(self) -> None:
        self._dispatch()

    def do_PUT(self) -> None:
        self._dispatch()

    def do_DELETE(self) -> None:
        self._dispatch()

    def _read_body(self) -> bytes | None:
        header = self.headers.get("Content-Length")
        if not header:
            return b""
        try:
            length = int(header)
        except ValueError:
            return None
        if length < 0:
            return None
        return self.rfile.read(length)

    def _dispatch(self) -> None:
        body = self._read_body()
        if body is None:
            self.send_error(400, "Invalid Content-Length")
            return
        uri = self.path.split("?", 1)[0]
        router: Router = getattr(self.server, "router")
        response = router.dispatch(Request(self.command, uri, body))
        self.send_response(response.status)
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(response.body)))
        self.end_headers()
        self.wfile.write(response.body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


def create_server(host: str, port: int, router: Router) -> HTTPServer:
    """Bind an HTTP server on ``host:port`` that dispatches through ``router``."""
    return _ApiServer((host, port), ApiRequestHandler, router)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the API server until SIGINT or SIGTERM arrives."""
    parser = argparse.ArgumentParser(prog="itemapi", description="Serve the item API.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    print(f"Starting API server on http://localhost:{args.port}")
    print("To exit, press Ctrl+C")
    try:
        server = create_server(args.host, args.port, build_router(ItemApi()))
    except (OSError, OverflowError):
        print(
            f"Error: Cannot start listener. Is port {args.port} already in use "
            "or do you lack permissions?",
            file=sys.stderr,
        )
        return 1

    stop = threading.Event()

    def on_signal(signo: int, frame: Any) -> None:
        logger.info("Received signal %d, shutting down.", signo)
        stop.set()

    watched = (signal.SIGINT, signal.SIGTERM)
    previous = {signo: signal.signal(signo, on_signal) for signo in watched}
    try:
        with server:
            while not stop.is_set():
                server.handle_request()
    finally:
        for signo, handler in previous.items():
            signal.signal(signo, handler)
    print("Server gracefully shut down.")
    return 0