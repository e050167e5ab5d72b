"""
Bearer token helpers.
"""

from __future__ import annotations

import time
from typing import Any

import jwt

from taskboard.config import config

ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24


class AuthSecurityError(RuntimeError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    raw = (authorization or "").strip()
    if not raw:
        raise AuthSecurityError("Missing Authorization header.")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise AuthSecurityError("Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise AuthSecurityError("Authorization must be: Bearer <token>.")
    return token


def build_access_token(*, user_id: int, email: str, expires_in_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    issued_at = now_epoch_s()
    payload = {
        "sub": str(user_id),
        "email": email,
        "type": "access",
        "iat": issued_at,
        "exp": issued_at + expires_in_minutes * 60,
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    # Handlers forward the raw header value; accept it as-is.
    if " " in raw:
        raw = extract_bearer_token(raw)

    try:
        payload = jwt.decode(raw, config.jwt_secret, algorithms=[config.jwt_algorithm])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise AuthSecurityError("Token is not an access token.")

    try:
        payload["user_id"] = int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthSecurityError("Token has no user id.") from exc
    return payload
