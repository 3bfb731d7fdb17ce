"""HTTP mapping of use case errors

Use cases only know error codes. The API layer raises ``ClientError`` and
the handler registered in ``create_app`` renders it as
``{"error": {"code": ..., "message": ...}}``.
"""

from typing import Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error
from src.app import errors

STATUS_BY_CODE = {
    errors.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    errors.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    errors.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    errors.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    errors.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ClientError(Exception):
    """
    Error surfaced to the HTTP client

    ``status_code`` overrides the table lookup; unknown codes are 400.
    ``Error.reason`` is never rendered.
    """

    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST)

    def to_dict(self) -> dict:
        return {"error": {"code": self.error.code, "message": self.error.message}}


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)
