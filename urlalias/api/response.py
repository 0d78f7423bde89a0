"""
Response envelope for the urlalias HTTP API.

Every JSON response carries `status` ("OK" or "Error") and, on failure, a
human-readable `error` message.
"""

from typing import Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel

STATUS_OK = "OK"
STATUS_ERROR = "Error"


class Response(BaseModel):
    """Common envelope for all API responses."""
    status: str
    error: Optional[str] = None


class SaveResponse(Response):
    """Envelope for POST /url; echoes the stored alias and its id."""
    alias: Optional[str] = None
    id: Optional[int] = None


def ok() -> Response:
    return Response(status=STATUS_OK)


def error(msg: str) -> Response:
    return Response(status=STATUS_ERROR, error=msg)


def error_response(status_code: int, msg: str, headers: Optional[dict] = None) -> JSONResponse:
    """Build an error envelope as a JSONResponse with the given HTTP status."""
    return JSONResponse(
        status_code=status_code,
        content=error(msg).model_dump(exclude_none=True),
        headers=headers,
    )
