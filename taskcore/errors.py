"""Domain error system + Flask handler registration.

Taxonomy:
 - ValidationError          400  bad input, all field errors collected
 - SessionError             401  no resolvable principal (app_sessions)
 - AuthzError               403  authenticated but insufficient role (app_authz)
 - NotFoundError            404  missing OR not owned, deliberately identical
 - StorageUnavailableError  500  persistence fault, generic message only
"""
from __future__ import annotations

import uuid
from typing import Any

from flask import Flask, current_app, request
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound
from werkzeug.wrappers.response import Response

from .http_errors import (
    failure,
    forbidden,
    internal_server_error,
    not_found,
    unauthorized,
    validation_failed,
)


class DomainError(Exception):
    status = 400

    def __init__(self, message: str, **extra: Any):
        self.message = message
        self.extra = extra
        super().__init__(message)


class ValidationError(DomainError):
    status = 400

    def __init__(self, errors: list[str], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = list(errors)


class NotFoundError(DomainError):
    status = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class StorageUnavailableError(DomainError):
    """Persistence fault; fatal to the request, never to the process."""

    status = 500

    def __init__(self, message: str = "Server error", cause: str | None = None):
        super().__init__(message)
        self.cause = cause


def _detail(value: str | None) -> str | None:
    # Diagnostic text only leaves the process in development
    if value and current_app.config.get("EXPOSE_ERROR_DETAIL"):
        return value
    return None


def register_error_handlers(app: Flask) -> None:
    # Imported here: both modules depend on db/errors themselves
    from .app_authz import AuthzError
    from .app_sessions import SessionError

    @app.errorhandler(SessionError)
    def _h_session(err: SessionError) -> Response:
        return unauthorized(str(err) or "Authentication required")

    @app.errorhandler(AuthzError)
    def _h_authz(err: AuthzError) -> Response:
        return forbidden(str(err) or "Access denied")

    @app.errorhandler(ValidationError)
    def _h_validation(err: ValidationError) -> Response:
        return validation_failed(err.errors, err.message)

    @app.errorhandler(StorageUnavailableError)
    def _h_storage(err: StorageUnavailableError) -> Response:
        # already logged with traceback by db.session_scope
        return internal_server_error(err.message, error=_detail(err.cause))

    @app.errorhandler(DomainError)
    def _h_domain(err: DomainError) -> Response:
        return failure(err.status, err.message, **err.extra)

    @app.errorhandler(NotFound)
    def _h404(_: Exception) -> Response:
        return not_found("Route not found")

    # Unknown method on a known path is reported like an unknown route
    @app.errorhandler(MethodNotAllowed)
    def _h405(_: Exception) -> Response:
        app.logger.warning("Mapping 405 to 404 method=%s path=%s", request.method, request.path)
        return not_found("Route not found")

    @app.errorhandler(HTTPException)
    def _h_http(ex: HTTPException) -> Response:
        status = ex.code or 500
        if status >= 500:
            return internal_server_error()
        return failure(status, ex.description or ex.name)

    @app.errorhandler(Exception)
    def _h_exception(ex: Exception) -> Response:
        incident_id = str(uuid.uuid4())
        app.logger.exception("Unhandled exception incident_id=%s path=%s", incident_id, request.path)
        return internal_server_error(incident_id=incident_id, error=_detail(str(ex)))


__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "StorageUnavailableError",
    "register_error_handlers",
]
