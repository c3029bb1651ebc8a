# -*- coding: utf-8 -*-
from __future__ import annotations

import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .extensions import db

logger = logging.getLogger(__name__)


class HisabError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(HisabError):
    """Operation targets an id that is not stored."""
    status_code = 404


class ValidationError(HisabError):
    """Malformed create/update/import payload."""
    status_code = 400


class PersistenceFailure(HisabError):
    """Storage write failed; the transaction was rolled back."""
    status_code = 500


def _error(message: str, status: int):
    return jsonify({"ok": False, "error": message}), status


def register_error_handlers(app) -> None:
    @app.errorhandler(HisabError)
    def handle_hisab_error(exc: HisabError):
        if exc.status_code >= 500:
            logger.error("%s: %s", type(exc).__name__, exc.message)
        else:
            logger.info("%s: %s", type(exc).__name__, exc.message)
        return _error(exc.message, exc.status_code)

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(exc: SQLAlchemyError):
        db.session.rollback()
        logger.exception("Database error")
        return _error("Storage failure", PersistenceFailure.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return _error(exc.description or exc.name, exc.code or 500)
