from taskboard.auth.facebook import FacebookAppAccessToken, FacebookError, fetch_app_access_token
from taskboard.auth.security import (
    AuthSecurityError,
    build_access_token,
    decode_access_token,
    extract_bearer_token,
)

__all__ = [
    "AuthSecurityError",
    "FacebookAppAccessToken",
    "FacebookError",
    "build_access_token",
    "decode_access_token",
    "extract_bearer_token",
    "fetch_app_access_token",
]
