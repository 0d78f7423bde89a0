import pytest
from fastapi import HTTPException

from auth.config import build_users
from auth.service import authenticate_user
from auth.utils import hash_password
from urlalias.config import Settings


def test_build_users_from_settings():
    users = build_users(Settings(http_user="ops", http_password="pw"))
    assert users == {"ops": "pw"}


def test_plain_password_accepted():
    assert authenticate_user({"ops": "pw"}, "ops", "pw") == "ops"


def test_hashed_password_accepted():
    users = {"ops": hash_password("pw")}
    assert authenticate_user(users, "ops", "pw") == "ops"


@pytest.mark.parametrize("username,password", [("ops", "wrong"), ("nobody", "pw"), ("ops", "")])
def test_bad_credentials_rejected(username, password):
    with pytest.raises(HTTPException) as exc_info:
        authenticate_user({"ops": "pw"}, username, password)
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "unauthorized"
    assert exc_info.value.headers["WWW-Authenticate"] == 'Basic realm="urlalias"'


def test_hash_password_format():
    hashed = hash_password("pw")
    assert hashed.startswith("sha256:")
    assert len(hashed) == len("sha256:") + 64


def test_empty_stored_password_never_authenticates():
    with pytest.raises(HTTPException) as exc_info:
        authenticate_user({"admin": ""}, "admin", "")
    assert exc_info.value.status_code == 401
