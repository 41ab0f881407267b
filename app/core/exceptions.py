# app/core/exceptions.py
"""
Domain errors raised by the service layer.

Each error knows the HTTP status it maps to and may carry extra fields that
are merged into the JSON error body by the handler registered in app.main.
"""
from typing import Any, Dict


class CommandCenterError(Exception):
    """Base class for business-rule failures."""

    status_code = 500

    def __init__(self, error: str, **extra: Any):
        self.error = error
        self.extra = extra
        super().__init__(error)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, **self.extra}


class NotFoundError(CommandCenterError):
    status_code = 404


class InvalidStateError(CommandCenterError):
    status_code = 400


class TemplateLockedError(InvalidStateError):
    status_code = 403


class TokenExpiredError(InvalidStateError):
    status_code = 401


class ReprintNotAllowedError(InvalidStateError):
    status_code = 400


class CapacityExceededError(CommandCenterError):
    status_code = 400


class ReprintLimitExceededError(CapacityExceededError):
    status_code = 400


class InputValidationError(CommandCenterError):
    status_code = 400


class NotificationError(CommandCenterError):
    """An email provider rejected or failed a send the caller depends on."""

    status_code = 502
