"""
Domain errors raised by services and translated to HTTP by the routes
"""
from typing import Optional


class ServiceError(Exception):
    """Base class for expected business errors"""

    def __init__(self, message: str, detail: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class NotFoundError(ServiceError):
    """Missing row, or a row the caller may not see"""


class AccessDeniedError(ServiceError):
    """Caller's role does not allow the operation"""


class BadRequestError(ServiceError):
    """Input refers to something invalid"""


class ConflictError(ServiceError):
    """Uniqueness violation"""
