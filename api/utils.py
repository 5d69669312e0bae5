"""
Utility Functions
Uniform error bodies for the route layer
"""
from typing import Optional
from fastapi.responses import JSONResponse
import logging

from planforge.errors import PlanForgeError

logger = logging.getLogger(__name__)

ERROR_STATUS_CODE = 500


def error_body(error: str, details: Optional[str] = None) -> dict:
    body = {"error": error}
    if details:
        body["details"] = details
    return body


def error_response(error: str, exc: Optional[Exception] = None) -> JSONResponse:
    """
    Build the ``{error, details}`` response every endpoint fails with.

    Clients branch on the text, never on the status code, which is always 500.
    """
    details = None
    if isinstance(exc, PlanForgeError):
        details = exc.details
    elif exc is not None:
        details = str(exc)
    return JSONResponse(status_code=ERROR_STATUS_CODE, content=error_body(error, details))
