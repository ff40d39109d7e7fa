"""Uniform error envelope: ``{"error": {"message", "code", "details"?}}``."""
from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from .core.constants import GENERIC_ERROR_MESSAGE
from .core.exceptions import DomainError

logger = logging.getLogger(__name__)


def error_response(message: str, code: str, status: int, details: Optional[dict[str, Any]] = None):
    error: dict[str, Any] = {"message": message, "code": code}
    if details:
        error["details"] = details
    return jsonify({"error": error}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.status >= 500:
            return error_response(GENERIC_ERROR_MESSAGE, e.code, e.status)
        return error_response(e.message, e.code, e.status, e.details)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        code = (e.name or "error").upper().replace(" ", "_")
        return error_response(e.description or e.name, code, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response(GENERIC_ERROR_MESSAGE, "INTERNAL_ERROR", 500)
