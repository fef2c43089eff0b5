"""Shared failure-envelope helpers for consistent error responses.

Every error leaves the API as ``{"success": false, "message": ..., **extra}``.
Extra keys with a ``None`` value are dropped so optional diagnostics
(``errors``, ``error``) only appear when present.
"""
from __future__ import annotations

from flask import g, jsonify
from werkzeug.wrappers.response import Response


def failure(status: int, message: str, **extra: object) -> Response:
    payload: dict[str, object] = {"success": False, "message": message}
    for k, v in extra.items():
        if v is not None:
            payload[k] = v
    resp = jsonify(payload)
    resp.status_code = status
    rid = getattr(g, "request_id", None)
    if rid and "X-Request-Id" not in resp.headers:
        resp.headers["X-Request-Id"] = rid
    return resp


def validation_failed(errors: list[str], message: str = "Validation failed", **extra: object) -> Response:
    return failure(400, message, errors=errors, **extra)


def unauthorized(message: str = "Authentication required", **extra: object) -> Response:
    resp = failure(401, message, **extra)
    resp.headers["WWW-Authenticate"] = "Bearer"
    return resp


def forbidden(message: str = "Access denied", **extra: object) -> Response:
    return failure(403, message, **extra)


def not_found(message: str = "Route not found", **extra: object) -> Response:
    return failure(404, message, **extra)


def internal_server_error(message: str = "Internal server error", **extra: object) -> Response:
    return failure(500, message, **extra)


__all__ = [
    "failure",
    "validation_failed",
    "unauthorized",
    "forbidden",
    "not_found",
    "internal_server_error",
]
