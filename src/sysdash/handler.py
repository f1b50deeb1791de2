"""Read API over the snapshot store."""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

from .delta import interface_rates
from .errors import AppError
from .http import ApiResponse, json_error, json_ok, raw_ok, text_ok
from .persist import Persister
from .store import Store

log = logging.getLogger(__name__)


class ReadApi:
    """Serve the current snapshot, the history and the persisted file.

    There are no mutating routes and no authentication.
    """

    def __init__(self, store: Store, persister: Persister) -> None:
        self.store = store
        self.persister = persister

    def current(self) -> ApiResponse:
        return json_ok(self.store.current().to_dict())

    def history(self) -> ApiResponse:
        return json_ok([s.to_dict() for s in self.store.history_snapshot()])

    def persisted(self) -> ApiResponse:
        try:
            return raw_ok(self.persister.read_raw())
        except FileNotFoundError as e:
            raise AppError(
                status_code=404, code="not_found", message="No snapshot has been persisted yet."
            ) from e
        except OSError as e:
            raise AppError(
                status_code=503, code="unavailable", message="Persisted snapshot is unreadable."
            ) from e

    def net_rates(self) -> ApiResponse:
        pair = self.store.latest_pair()
        if pair is None:
            return json_ok([])
        return json_ok([r.to_dict() for r in interface_rates(*pair)])

    def _route(self, method: str, path: str) -> ApiResponse:
        if method not in ("GET", "HEAD"):
            raise AppError(status_code=405, code="method_not_allowed", message="Only GET is supported.")

        if path == "/healthz":
            return text_ok("ok")
        if path == "/api/metrics":
            return self.current()
        if path == "/api/history":
            return self.history()
        if path == "/api/metrics.json":
            return self.persisted()
        if path == "/api/net/rates":
            return self.net_rates()

        raise AppError(status_code=404, code="not_found", message="No route matches the request.")

    def dispatch(self, method: str, raw_path: str) -> ApiResponse:
        method = method.upper()
        path = urlsplit(raw_path).path
        try:
            resp = self._route(method, path)
        except AppError as e:
            log.warning("handled_error", extra={"method": method, "path": path, "code": e.code})
            return json_error(e.status_code, e.code, e.message)
        except Exception:
            log.exception("unhandled_error", extra={"method": method, "path": path})
            return json_error(500, "internal_error", "Unexpected server error.")

        log.debug("request", extra={"method": method, "path": path, "status": resp.status_code})
        return resp
