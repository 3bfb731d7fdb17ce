"""Error taxonomy shared by use cases

Use cases return ``Error(code=...)`` with one of the codes below. Only the
API layer knows how a code maps to a transport status.
"""

import logging
from typing import Optional
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from libs.result import Error

logger = logging.getLogger(__name__)

UNAUTHORIZED = "UNAUTHORIZED"
FORBIDDEN = "FORBIDDEN"
BAD_REQUEST = "BAD_REQUEST"
NOT_FOUND = "NOT_FOUND"
VALIDATION_ERROR = "VALIDATION_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"

# Authorization failures never explain themselves
FORBIDDEN_MESSAGE = "You do not have access to this resource"
UNAUTHORIZED_MESSAGE = "Unauthorized"
NO_ORGANIZATION_MESSAGE = "User is not assigned to an organization"

# SQLSTATE -> user-facing message
STORAGE_ERROR_MESSAGES = {
    "23505": "A record with the same unique value already exists",
    "23503": "A referenced record does not exist",
    "23502": "A required value is missing",
    "23514": "A value violates a data constraint",
    "40001": "The operation conflicted with a concurrent update, please retry",
    "40P01": "The operation conflicted with a concurrent update, please retry",
    "57014": "The operation timed out",
}

# Fallback by exception type when the driver reports no SQLSTATE
STORAGE_ERROR_TYPE_MESSAGES = {
    IntegrityError: "The data conflicts with an existing record",
    OperationalError: "The database is temporarily unavailable",
}

DEFAULT_STORAGE_MESSAGE = "Unexpected storage error"


def _sqlstate(exc: DBAPIError) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def storage_error_message(exc: Exception) -> str:
    """Translate a storage exception into a user-facing message"""
    if isinstance(exc, DBAPIError):
        code = _sqlstate(exc)
        if code in STORAGE_ERROR_MESSAGES:
            return STORAGE_ERROR_MESSAGES[code]
    for exc_type, message in STORAGE_ERROR_TYPE_MESSAGES.items():
        if isinstance(exc, exc_type):
            return message
    return DEFAULT_STORAGE_MESSAGE


def unauthorized(reason: Optional[str] = None) -> Error:
    return Error(code=UNAUTHORIZED, message=UNAUTHORIZED_MESSAGE, reason=reason)


def forbidden(reason: Optional[str] = None) -> Error:
    return Error(code=FORBIDDEN, message=FORBIDDEN_MESSAGE, reason=reason)


def bad_request(message: str, reason: Optional[str] = None) -> Error:
    return Error(code=BAD_REQUEST, message=message, reason=reason)


def not_found(what: str, reason: Optional[str] = None) -> Error:
    return Error(code=NOT_FOUND, message=f"{what} not found", reason=reason)


def validation_error(message: str, reason: Optional[str] = None) -> Error:
    return Error(code=VALIDATION_ERROR, message=message, reason=reason)


def internal_error(message: str, exc: Exception) -> Error:
    """Log an unexpected failure and wrap it"""
    logger.error(f"{message}: {exc}")
    if isinstance(exc, DBAPIError):
        return Error(code=INTERNAL_ERROR, message=storage_error_message(exc), reason=str(exc))
    return Error(code=INTERNAL_ERROR, message=message, reason=str(exc))
