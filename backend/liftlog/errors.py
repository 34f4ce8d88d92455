"""
Domain errors raised by the write pipeline, the ownership checks and the
identity guard. Each carries the HTTP status the API maps it to; the
handler in `liftlog.main` renders them as `{"detail": ...}`.
"""
from __future__ import annotations
from typing import Optional

from fastapi import status


class LiftLogError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: Optional[dict[str, str]] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def payload(self) -> dict:
        return {"detail": self.message}


class Unauthorized(LiftLogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(LiftLogError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(LiftLogError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidInput(LiftLogError):
    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateOrder(InvalidInput):
    def __init__(self, field: str, value: int):
        super().__init__(f"duplicate {field} {value}")
        self.field = field
        self.value = value


class StoreFailure(LiftLogError):
    """A record store call failed. Earlier steps of the run are not undone."""

    def __init__(self, step: str, cause: Optional[BaseException] = None):
        super().__init__(f"store failure during '{step}'")
        self.step = step
        self.cause = cause

    def payload(self) -> dict:
        return {"detail": self.message, "step": self.step}
