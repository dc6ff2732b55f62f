# blog_api/core/test_security.py
"""
Password hashing and access token tests.

Usage: python -m pytest blog_api/core/test_security.py -v
"""

from datetime import timedelta

from flask_jwt_extended import create_access_token, decode_token

from blog_api.core.security import (
    hash_password,
    verify_password,
    issue_access_token,
    verify_access_token,
)


def test_hash_and_verify_password():
    hashed = hash_password("secret1")
    assert hashed != "secret1"
    assert hashed.startswith("$2")
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


def test_same_password_hashes_differently():
    assert hash_password("secret1") != hash_password("secret1")


def test_verify_password_with_bad_input():
    assert not verify_password("secret1", "not-a-bcrypt-hash")
    assert not verify_password("", hash_password("secret1"))
    assert not verify_password("secret1", None)


def test_issued_token_round_trips(app):
    with app.app_context():
        token = issue_access_token("user-1", "Alice")
        caller = verify_access_token(token)
        claims = decode_token(token)

    assert caller.id == "user-1"
    assert caller.name == "Alice"
    assert claims['exp'] - claims['iat'] == 24 * 60 * 60


def test_expired_token_is_rejected(app):
    with app.app_context():
        token = create_access_token(identity="user-1", expires_delta=timedelta(seconds=-1))
        assert verify_access_token(token) is None


def test_tampered_token_is_rejected(app):
    with app.app_context():
        token = issue_access_token("user-1", "Alice")
        header, payload, signature = token.split('.')
        forged = '.'.join([header, payload, signature[::-1]])
        assert verify_access_token(forged) is None
        assert verify_access_token("garbage") is None
