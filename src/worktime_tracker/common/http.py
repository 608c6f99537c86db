"""Flask helpers shared by the feature controllers."""

from __future__ import annotations

import logging
from datetime import datetime

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, EmployeeNotFound, NotWorking, StoreUnavailable, ValidationError
from .datetime_utils import now_local, parse_iso_instant

logger = logging.getLogger(__name__)


def reference_from_args() -> datetime:
    """`reference` query parameter, or the server's local now."""
    value = request.args.get("reference")
    return parse_iso_instant(value) if value else now_local()


def register_error_handlers(app: Flask) -> None:
    def _error(status_code: int, message: str, **extra):
        return jsonify({"success": False, "message": message, **extra}), status_code

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return _error(400, str(e))

    @app.errorhandler(EmployeeNotFound)
    def _not_found(e: EmployeeNotFound):
        return _error(404, str(e))

    @app.errorhandler(NotWorking)
    def _not_working(e: NotWorking):
        return _error(409, str(e), status="not_working")

    @app.errorhandler(StoreUnavailable)
    def _unavailable(e: StoreUnavailable):
        # Never report a store failure as an empty total.
        return _error(503, "Time tracking is temporarily unavailable", status="unavailable")

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return _error(400, str(e))

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return _error(e.code or 500, e.description or e.name)
