"""
Core authentication logic.

Validates Basic credentials against the configured user map. Both unknown
users and wrong passwords yield the same 401, so callers cannot tell which
usernames exist. A user with an empty stored password can never log in.
"""

import secrets
from typing import Dict

from fastapi import HTTPException, status

from .config import REALM
from .utils import HASH_PREFIX, hash_password


def unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="unauthorized",
        headers={"WWW-Authenticate": f'Basic realm="{REALM}"'},
    )


def authenticate_user(users: Dict[str, str], username: str, password: str) -> str:
    """
    Authenticate a user by validating their username and password.

    Args:
        users (Dict[str, str]): Username -> stored password (plain or "sha256:<hex>").
        username (str): The username provided by the client.
        password (str): The password provided by the client.

    Returns:
        str: The authenticated username.

    Raises:
        HTTPException: If authentication fails (401 Unauthorized).
    """
    stored_password = users.get(username)
    if not stored_password:
        raise unauthorized()

    candidate = hash_password(password) if stored_password.startswith(HASH_PREFIX) else password
    if secrets.compare_digest(stored_password.encode(), candidate.encode()):
        return username

    raise unauthorized()
