"""Request logging.

One structured line per request on the ``taskcore.request`` logger, plus an
``X-Request-Id`` echoed back to the caller (taken from the request when
present). Services log through ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import time
import uuid

from flask import Flask, g, request
from werkzeug.wrappers.response import Response

REQUEST_LOGGER = "taskcore.request"


def get_request_logger() -> logging.Logger:
    log = logging.getLogger(REQUEST_LOGGER)
    if not log.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("%(message)s"))
        log.addHandler(h)
    log.setLevel(logging.INFO)
    return log


def install_request_logging(app: Flask) -> None:
    log = get_request_logger()

    @app.before_request
    def _start() -> None:
        g._t0 = time.perf_counter()
        g.request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())

    @app.after_request
    def _finish(resp: Response) -> Response:
        dur_ms = int((time.perf_counter() - getattr(g, "_t0", time.perf_counter())) * 1000)
        rid = getattr(g, "request_id", None) or str(uuid.uuid4())
        resp.headers["X-Request-Id"] = rid
        resp.headers["X-Request-Duration-ms"] = str(dur_ms)
        if "Cache-Control" not in resp.headers:
            resp.headers["Cache-Control"] = "no-store"
        log.info(
            {
                "request_id": rid,
                "user_id": getattr(g, "principal_id", None),
                "role": getattr(g, "user_role", None),
                "method": request.method,
                "path": request.path,
                "status": resp.status_code,
                "duration_ms": dur_ms,
            }
        )
        return resp


__all__ = ["REQUEST_LOGGER", "get_request_logger", "install_request_logging"]
