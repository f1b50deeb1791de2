"""Minimal HTTP front for ReadApi."""

from __future__ import annotations

import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

from .handler import ReadApi

log = logging.getLogger(__name__)


def _make_handler(api: ReadApi) -> type[BaseHTTPRequestHandler]:
    class RequestHandler(BaseHTTPRequestHandler):
        server_version = "sysdash"

        def _respond(self, include_body: bool) -> None:
            resp = api.dispatch(self.command, self.path)
            body = resp.render()
            self.send_response(resp.status_code)
            for key, value in resp.all_headers().items():
                self.send_header(key, value)
            self.send_header("content-length", str(len(body)))
            self.end_headers()
            if include_body:
                self.wfile.write(body)

        def do_GET(self) -> None:  # noqa: N802
            self._respond(include_body=True)

        def do_HEAD(self) -> None:  # noqa: N802
            self._respond(include_body=False)

        def do_POST(self) -> None:  # noqa: N802
            self._respond(include_body=True)

        do_PUT = do_POST
        do_DELETE = do_POST

        def log_message(self, format: str, *args: object) -> None:  # noqa: A002
            log.debug(format % args)

    return RequestHandler


def make_server(api: ReadApi, host: str, port: int) -> ThreadingHTTPServer:
    """Bind the listening socket. Raises OSError if the address is unavailable."""
    server = ThreadingHTTPServer((host, port), _make_handler(api))
    server.daemon_threads = True
    return server
