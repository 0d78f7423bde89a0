"""
Request schemas for the urlalias HTTP API.

Validation here rejects malformed input before it reaches the AliasStore.
The error messages produced for failed validation are built by
`validation_message()` and returned in the response envelope.
"""

from typing import Optional
from urllib.parse import urlparse

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, field_validator

from ..manager.alias_store import ALIAS_PATTERN, MAX_ALIAS_LENGTH

# Paths served by fixed routes; an alias with one of these names could never
# be reached through a redirect.
RESERVED_ALIASES = frozenset({"docs", "health"})


class URLRequest(BaseModel):
    """Request payload for creating a new alias."""
    url: str
    alias: Optional[str] = None

    @field_validator("url")
    @classmethod
    def _url_is_absolute_http(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError("not a valid URL")
        return v

    @field_validator("alias")
    @classmethod
    def _alias_is_base62(cls, v: Optional[str]) -> Optional[str]:
        if v and (not ALIAS_PATTERN.match(v) or len(v) > MAX_ALIAS_LENGTH or v in RESERVED_ALIASES):
            raise ValueError("not a valid alias")
        return v


def validation_message(exc: RequestValidationError) -> str:
    """
    Render the first validation error as a short message.

    Examples:
        "field url is a required field"
        "field url is not a valid URL"
        "failed to decode request"
    """
    errors = exc.errors()
    if not errors:
        return "invalid request"
    err = errors[0]
    loc = [str(part) for part in err.get("loc", ()) if part != "body"]
    kind = err.get("type", "")

    if kind == "json_invalid" or not loc:
        return "failed to decode request"

    field = ".".join(loc)
    if kind == "missing":
        return f"field {field} is a required field"
    if field == "url":
        return "field url is not a valid URL"
    if field == "alias":
        return "field alias is not a valid alias"
    return f"field {field} is not valid"
