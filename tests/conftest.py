"""Shared fixtures: a device-bound HTTP client and a pre-resolved session."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from jlrcmd.api.client import InControlClient
from jlrcmd.auth.session import SessionManager
from jlrcmd.models.auth import Session
from tests.constants import DEVICE_ID, USER_ID

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@pytest_asyncio.fixture
async def client() -> AsyncIterator[InControlClient]:
    c = InControlClient(DEVICE_ID)
    yield c
    await c.close()


@pytest.fixture
def resolved_session() -> Session:
    return Session(
        access_token="access-abc",
        authorization_token="authz-def",
        refresh_token="refresh-ghi",
        expires_at=time.time() + 3600,
        device_registered=True,
        user_id=USER_ID,
    )


@pytest.fixture
def sessions(resolved_session: Session) -> SessionManager:
    """A SessionManager stand-in that always hands out *resolved_session*."""
    mgr = MagicMock(spec=SessionManager)
    mgr.get_session = AsyncMock(return_value=resolved_session)
    return mgr
