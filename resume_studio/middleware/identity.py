"""Identity middleware.

The OAuth front end signs a short-lived HS256 token carrying the signed-in
user's email, name and picture. These decorators read it from the
Authorization header and attach the identity to ``g.identity``.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Optional

import jwt
from flask import current_app, g, jsonify, request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Opaque identity of a signed-in user."""
    email: str
    name: str = ""
    picture: Optional[str] = None


def error_response(message: str, status: int = 401):
    """Helper to create error responses."""
    return jsonify({
        "error": "Unauthorized",
        "message": message,
        "status": status,
    }), status


def issue_identity_token(identity: Identity, secret: str, expires_in: int = 3600) -> str:
    """Sign an identity token the way the OAuth front end does."""
    now = int(time.time())
    payload = {
        "email": identity.email,
        "name": identity.name,
        "picture": identity.picture,
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def decode_identity_token(token: str, secret: str) -> Identity:
    """
    Validate a bearer token and return the identity it carries.

    Raises:
        ValueError: If token is invalid, expired or carries no email
    """
    try:
        payload = jwt.decode(token, secret, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise ValueError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise ValueError(f"Invalid token: {str(e)}")

    email = (payload.get("email") or "").strip().lower()
    if not email:
        raise ValueError("Token carries no email")

    return Identity(
        email=email,
        name=payload.get("name") or "",
        picture=payload.get("picture"),
    )


def _bearer_token() -> Optional[str]:
    """
    Token from the Authorization header, None when the header is absent.

    Raises:
        ValueError: If the header is malformed
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise ValueError("Invalid Authorization header format. Use: Bearer <token>")
    return parts[1]


def optional_identity(f):
    """
    Attach the caller's identity to ``g.identity``, or None for anonymous calls.

    A missing or invalid token never rejects the request.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        g.identity = None
        try:
            token = _bearer_token()
            if token:
                g.identity = decode_identity_token(token, current_app.config["AUTH_TOKEN_SECRET"])
        except ValueError as e:
            logger.info(f"Ignoring unusable identity token: {e}")
        return f(*args, **kwargs)

    return decorated_function


def require_identity(f):
    """
    Decorator to require a signed-in user.

    Usage:
        @bp.route("/resumes")
        @require_identity
        def list_resumes():
            email = g.identity.email
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            token = _bearer_token()
        except ValueError as e:
            return error_response(str(e))

        if not token:
            return error_response("Authorization header is required")

        try:
            g.identity = decode_identity_token(token, current_app.config["AUTH_TOKEN_SECRET"])
        except ValueError as e:
            return error_response(str(e))

        return f(*args, **kwargs)

    return decorated_function
