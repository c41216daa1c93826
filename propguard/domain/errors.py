# propguard/domain/errors.py
from __future__ import annotations


class EngineError(Exception):
    """Base for every failure the engine reports to its callers."""

    code = "ENGINE_ERROR"
    http_status = 500

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(EngineError):
    """Caller input failed a precondition. Never retried."""

    code = "MISSING_FIELD"
    http_status = 400


class NotFoundError(EngineError):
    code = "NOT_FOUND"
    http_status = 404


class StoreError(EngineError):
    """Backing store call failed; surfaced as an internal failure."""

    code = "STORE_ERROR"
    http_status = 500
