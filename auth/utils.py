"""
Utility functions for the auth module.
"""

import hashlib

HASH_PREFIX = "sha256:"


def hash_password(password: str) -> str:
    """
    Return the stored form of `password`: "sha256:" followed by the hex digest.

    Note:
        Fine for a single operator credential supplied via environment.
        For user databases, use a slow hash such as passlib[bcrypt].
    """
    return HASH_PREFIX + hashlib.sha256(password.encode()).hexdigest()
