"""
Bearer-token guard for protected routes.
"""

from functools import wraps

from flask import g, jsonify, request

from taskboard.auth.security import AuthSecurityError, decode_access_token, extract_bearer_token
from taskboard.responses import ResponseEntity


def require_bearer_token(view):
    """
    Reject requests without a valid access token (401).

    The raw Authorization header value is left in ``g.access_token`` for the
    handler to forward to the service layer.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        header = request.headers.get("Authorization")
        try:
            decode_access_token(extract_bearer_token(header))
        except AuthSecurityError as e:
            return jsonify(ResponseEntity.unauthorized(str(e)).to_dict()), 401
        g.access_token = header
        return view(*args, **kwargs)

    return wrapper
