# blog_api/core/security.py
import logging
from dataclasses import dataclass
from typing import Optional

import bcrypt
import jwt
from flask import Flask, jsonify
from flask_jwt_extended import (
    JWTManager,
    create_access_token,
    decode_token,
    get_jwt,
    get_jwt_identity,
)

BCRYPT_ROUNDS = 10

jwt_manager = JWTManager()

@dataclass(frozen=True)
class Caller:
    """Identity embedded in a verified access token."""
    id: str
    name: Optional[str] = None

# --- Passwords ---
def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

def verify_password(password: str, hashed: str) -> bool:
    """Check a password against a stored bcrypt hash. Malformed hashes never match."""
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        logging.warning("Stored password hash is not a valid bcrypt hash.")
        return False

# --- Access tokens ---
def issue_access_token(user_id: str, name: str) -> str:
    """Create a signed access token carrying the user's id (as ``sub``) and name.

    The lifetime comes from ``JWT_ACCESS_TOKEN_EXPIRES``. Requires an application context.
    """
    return create_access_token(identity=user_id, additional_claims={"name": name})

def verify_access_token(token: str) -> Optional[Caller]:
    """Decode a bearer token. Returns ``None`` for any invalid, tampered or expired token.

    Checks a token outside a request, e.g. the one returned by login. Views use
    ``@jwt_required()`` with ``current_caller()`` instead; both check the same
    signing key and expiry. Requires an application context.
    """
    try:
        payload = decode_token(token)
    except jwt.PyJWTError as e:
        logging.info(f"Rejected access token: {e}")
        return None
    return Caller(id=payload["sub"], name=payload.get("name"))

def current_caller() -> Caller:
    """Caller of the current request. Only valid inside a ``@jwt_required()`` view."""
    return Caller(id=get_jwt_identity(), name=get_jwt().get("name"))

def init_jwt(app: Flask) -> None:
    """Attach the JWT manager and answer auth failures in the API's error format."""
    jwt_manager.init_app(app)

    @jwt_manager.unauthorized_loader
    def missing_token(reason):
        return jsonify({"error_code": "AUTHORIZATION_REQUIRED", "message": reason}), 401

    @jwt_manager.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"error_code": "INVALID_TOKEN", "message": reason}), 401

    @jwt_manager.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"error_code": "TOKEN_EXPIRED", "message": "Token has expired"}), 401
