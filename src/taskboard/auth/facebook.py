"""
Facebook Graph API client helpers.

Used endpoint:
- GET /oauth/access_token?grant_type=client_credentials
      -> {"access_token": "...", "token_type": "bearer"}
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

from taskboard.config import config


# Facebook failures are explicit and separable from other runtime errors.
class FacebookError(RuntimeError):
    pass


class FacebookAppAccessToken(BaseModel):
    token_type: str = Field(..., min_length=1)
    access_token: str = Field(..., min_length=1)


def fetch_app_access_token(
    *,
    app_id: str | None = None,
    app_secret: str | None = None,
    client: httpx.Client | None = None,
    timeout_s: float = 10.0,
) -> FacebookAppAccessToken:
    """
    Exchange the app id/secret for an app access token.
    """
    app_id = app_id or config.facebook_app_id
    app_secret = app_secret or config.facebook_app_secret
    if not app_id or not app_secret:
        raise FacebookError("FACEBOOK_APP_ID and FACEBOOK_APP_SECRET must be set.")

    params = {
        "client_id": app_id,
        "client_secret": app_secret,
        "grant_type": "client_credentials",
    }
    if client is None:
        with httpx.Client(base_url=config.facebook_graph_url, timeout=timeout_s) as owned:
            resp = owned.get("/oauth/access_token", params=params)
    else:
        resp = client.get("/oauth/access_token", params=params)

    if resp.status_code != 200:
        # Avoid dumping huge bodies; include a small snippet.
        body = resp.text[:500]
        raise FacebookError(f"Facebook token request failed: {resp.status_code} {body}")

    try:
        data: dict[str, Any] = resp.json()
    except ValueError as e:
        raise FacebookError("Facebook returned a non-JSON token payload.") from e
    try:
        return FacebookAppAccessToken.model_validate(data)
    except ValidationError as e:
        raise FacebookError("Facebook returned a malformed token payload.") from e
