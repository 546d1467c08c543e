from __future__ import annotations

import time
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Endpoint constants
# ---------------------------------------------------------------------------

IFAS_BASE_URL: str = "https://jlp-ifas.wirelesscar.net/ifas/jlr"
IFOP_BASE_URL: str = "https://jlp-ifop.wirelesscar.net/ifop/jlr"
IF9_BASE_URL: str = "https://jlp-ifoa.wirelesscar.net/if9/jlr"

TOKEN_URL: str = f"{IFAS_BASE_URL}/tokens"

# Fixed client credential baked into the InControl mobile apps ("as:aspass").
CLIENT_BASIC_AUTH: str = "Basic YXM6YXNwYXNz"

# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class TokenData(BaseModel):
    """Raw token response from the IFAS ``/tokens`` endpoint."""

    access_token: str
    authorization_token: str
    expires_in: int
    refresh_token: str | None = None
    token_type: str = "bearer"


class SessionState(StrEnum):
    """Where the session manager is in the login sequence."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    REGISTERING = "registering"
    RESOLVING_USER = "resolving_user"
    RESOLVED = "resolved"


class Session(BaseModel):
    """An authenticated identity with the InControl API.

    Sessions are immutable; each login step produces an updated copy.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str
    authorization_token: str
    refresh_token: str = ""
    token_type: str = "bearer"
    expires_at: float
    device_registered: bool = False
    user_id: str = ""

    @classmethod
    def from_token(cls, token: TokenData, *, issued_at: float | None = None) -> Session:
        """Build an unresolved session from a fresh token response."""
        issued = time.time() if issued_at is None else issued_at
        return cls(
            access_token=token.access_token,
            authorization_token=token.authorization_token,
            refresh_token=token.refresh_token or "",
            token_type=token.token_type,
            expires_at=issued + token.expires_in,
        )

    @property
    def is_resolved(self) -> bool:
        return self.device_registered and bool(self.user_id)

    @property
    def is_expired(self) -> bool:
        return time.time() >= self.expires_at

    @property
    def expires_in(self) -> int:
        """Seconds left before expiry (never negative)."""
        return max(0, int(self.expires_at - time.time()))
