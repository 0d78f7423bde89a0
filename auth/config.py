"""
Configuration for the auth module.

Builds the user map (username -> password) from urlalias settings. A single
write user is configured through URLALIAS_HTTP_USER / URLALIAS_HTTP_PASSWORD.
The password may be plain text or "sha256:<hex digest>".
"""

from typing import Dict

from urlalias.config import Settings

REALM = "urlalias"


def build_users(settings: Settings) -> Dict[str, str]:
    """Return the user map for the given settings."""
    return {settings.http_user: settings.http_password}
