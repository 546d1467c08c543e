from __future__ import annotations

import time

import pytest
from pydantic import ValidationError

from jlrcmd.models.auth import Session, SessionState, TokenData


class TestTokenData:
    def test_from_response(self) -> None:
        token = TokenData.model_validate(
            {
                "access_token": "abc",
                "authorization_token": "def",
                "expires_in": "86399",
                "refresh_token": "ghi",
            }
        )
        assert token.expires_in == 86399
        assert token.token_type == "bearer"

    def test_authorization_token_required(self) -> None:
        with pytest.raises(ValidationError):
            TokenData.model_validate({"access_token": "abc", "expires_in": 10})


class TestSession:
    def test_from_token_sets_expiry(self) -> None:
        token = TokenData(access_token="a", authorization_token="b", expires_in=600)
        session = Session.from_token(token, issued_at=1000.0)
        assert session.expires_at == 1600.0
        assert session.refresh_token == ""
        assert not session.is_resolved

    def test_resolved_needs_registration_and_user(self) -> None:
        base = Session(access_token="a", authorization_token="b", expires_at=time.time() + 60)
        assert not base.model_copy(update={"device_registered": True}).is_resolved
        assert not base.model_copy(update={"user_id": "U-1"}).is_resolved
        assert base.model_copy(update={"device_registered": True, "user_id": "U-1"}).is_resolved

    def test_sessions_are_immutable(self) -> None:
        session = Session(access_token="a", authorization_token="b", expires_at=0)
        with pytest.raises(ValidationError):
            session.user_id = "U-1"  # type: ignore[misc]

    def test_expiry(self) -> None:
        expired = Session(access_token="a", authorization_token="b", expires_at=time.time() - 1)
        fresh = Session(access_token="a", authorization_token="b", expires_at=time.time() + 120)
        assert expired.is_expired
        assert expired.expires_in == 0
        assert not fresh.is_expired
        assert 100 < fresh.expires_in <= 120


class TestSessionState:
    def test_values(self) -> None:
        assert [s.value for s in SessionState] == [
            "unauthenticated",
            "authenticating",
            "registering",
            "resolving_user",
            "resolved",
        ]
