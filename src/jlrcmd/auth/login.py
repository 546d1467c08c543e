"""The three InControl login steps: token exchange, device registration, user lookup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from jlrcmd.api.client import json_body
from jlrcmd.api.errors import AuthError
from jlrcmd.models.auth import (
    CLIENT_BASIC_AUTH,
    IF9_BASE_URL,
    IFOP_BASE_URL,
    TOKEN_URL,
    TokenData,
)

if TYPE_CHECKING:
    from jlrcmd.api.client import InControlClient
    from jlrcmd.models.auth import Session

logger = logging.getLogger(__name__)

USER_ACCEPT: str = "application/vnd.wirelesscar.ngtp.if9.User-v3+json"


# ---------------------------------------------------------------------------
# Token exchange
# ---------------------------------------------------------------------------


async def authenticate(client: InControlClient, username: str, password: str) -> TokenData:
    """Exchange account credentials for access and authorization tokens."""
    payload: dict[str, Any] = {
        "grant_type": "password",
        "username": username,
        "password": password,
    }
    logger.info("Authenticating %s with InControl", username)
    data = await client.post(
        TOKEN_URL,
        headers={"Authorization": CLIENT_BASIC_AUTH},
        json=payload,
    )
    if "access_token" not in data or "authorization_token" not in data:
        raise AuthError("Token exchange returned no access/authorization token")
    return TokenData.model_validate(data)


# ---------------------------------------------------------------------------
# Device registration
# ---------------------------------------------------------------------------


async def register_device(client: InControlClient, username: str, session: Session) -> bool:
    """Bind this client's device id to the account.

    Returns *True* only when the server answers ``204 No Content``.
    """
    payload: dict[str, Any] = {
        "access_token": session.access_token,
        "authorization_token": session.authorization_token,
        "expires_in": str(session.expires_in),
        "deviceID": client.device_id,
    }
    logger.info("Registering device %s", client.device_id)
    resp = await client.request(
        "POST",
        f"{IFOP_BASE_URL}/users/{username}/clients",
        bearer=session.access_token,
        json=payload,
    )
    registered = resp.status_code == 204
    logger.debug("Device registration result: %s (HTTP %d)", registered, resp.status_code)
    return registered


# ---------------------------------------------------------------------------
# User resolution
# ---------------------------------------------------------------------------


async def resolve_user(client: InControlClient, username: str, session: Session) -> str:
    """Look up the account's user id; this also confirms the login is valid."""
    logger.info("Resolving user id for %s", username)
    resp = await client.request(
        "GET",
        f"{IF9_BASE_URL}/users",
        bearer=session.access_token,
        headers={"Accept": USER_ACCEPT},
        params={"loginName": username},
    )
    if resp.status_code != 200:
        raise AuthError(
            f"User lookup for {username} returned HTTP {resp.status_code}",
            status_code=resp.status_code,
        )
    user_id = json_body(resp).get("userId")
    if not user_id:
        raise AuthError(f"User lookup for {username} returned no userId", status_code=200)
    return str(user_id)
