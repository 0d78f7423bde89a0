"""
FastAPI dependency functions for authentication.

Use with Depends() to protect routes. The user map is read from
`app.state.users`, which the app factory fills from settings.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .config import REALM
from .service import authenticate_user, unauthorized

# auto_error=False so missing credentials get the same envelope as bad ones
security = HTTPBasic(realm=REALM, auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPBasicCredentials] = Depends(security),
) -> str:
    """
    Dependency that retrieves and validates the current user.

    Returns:
        str: The authenticated username.
    """
    if credentials is None:
        raise unauthorized()
    return authenticate_user(request.app.state.users, credentials.username, credentials.password)
