"""CORS allow-list middleware.

Origins come from config (FRONTEND_URL). A matching Origin receives the
Access-Control-* headers; preflight OPTIONS requests are answered directly.
Non-matching origins get no CORS headers and the browser blocks them.
"""

from __future__ import annotations

from flask import Flask, make_response, request
from werkzeug.wrappers.response import Response

ALLOWED_METHODS = "GET,POST,PUT,PATCH,DELETE,OPTIONS"
ALLOWED_HEADERS = "Content-Type,Authorization"


def _allowed_origin(app: Flask) -> str | None:
    allowed: list[str] = app.config.get("CORS_ALLOWED_ORIGINS", []) or []
    origin = request.headers.get("Origin")
    if origin and origin in allowed:
        return origin
    return None


def _apply_cors(app: Flask, resp: Response) -> Response:
    origin = _allowed_origin(app)
    if origin is None:
        return resp
    resp.headers.add("Vary", "Origin")
    resp.headers["Access-Control-Allow-Origin"] = origin
    resp.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
    resp.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
    resp.headers["Access-Control-Allow-Credentials"] = "true"
    resp.headers["Access-Control-Max-Age"] = "600"
    return resp


def init_security(app: Flask) -> None:
    @app.before_request
    def _preflight() -> Response | None:
        if request.method == "OPTIONS" and request.headers.get("Access-Control-Request-Method"):
            return make_response("", 204)
        return None

    @app.after_request
    def _cors(resp: Response) -> Response:
        return _apply_cors(app, resp)


__all__ = ["init_security", "ALLOWED_METHODS", "ALLOWED_HEADERS"]
