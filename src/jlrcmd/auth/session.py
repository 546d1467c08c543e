"""Session caching and the single-flight login sequence."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jlrcmd._internal.mutex import Lease, MutexGate
from jlrcmd.api.errors import AuthError
from jlrcmd.auth.login import authenticate, register_device, resolve_user
from jlrcmd.models.auth import Session, SessionState

if TYPE_CHECKING:
    from jlrcmd.api.client import InControlClient

logger = logging.getLogger(__name__)

SESSION_GATE_TTL: float = 20.0


class SessionManager:
    """Own the login state machine and the resulting :class:`Session`.

    ``UNAUTHENTICATED -> AUTHENTICATING -> REGISTERING -> RESOLVING_USER ->
    RESOLVED``.  Concurrent callers of :meth:`get_session` share a single
    login: the gate serialises construction and late arrivals pick up the
    session the first caller cached.  A failure at any step drops back to
    ``UNAUTHENTICATED`` with nothing cached.  An expired session is
    rebuilt from scratch on the next call.

    A login that overruns the gate TTL is evicted and from then on only
    reports to its own caller; it never writes the state or cache its
    successor now owns.
    """

    def __init__(
        self,
        client: InControlClient,
        username: str,
        password: str,
        *,
        gate: MutexGate | None = None,
    ) -> None:
        self._client = client
        self._username = username
        self._password = password
        self._gate = gate or MutexGate("session construction", ttl=SESSION_GATE_TTL)
        self._state = SessionState.UNAUTHENTICATED
        self._session: Session | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session(self) -> Session | None:
        """The cached resolved session, or *None*."""
        return self._session

    def invalidate(self) -> None:
        """Forget the cached session; the next call logs in again."""
        self._session = None
        self._state = SessionState.UNAUTHENTICATED

    async def get_session(self) -> Session:
        cached = self._usable()
        if cached is not None:
            return cached

        async with self._gate.hold() as lease:
            # Another caller may have finished the login while we waited.
            cached = self._usable()
            if cached is not None:
                return cached
            try:
                session = await self._construct(lease)
            except BaseException:
                if lease.is_current:
                    self.invalidate()
                raise
            if not lease.is_current:
                # Evicted for running past the gate TTL; the next holder owns
                # the cache now.
                logger.warning("Login finished after its gate lease expired; not caching it")
                return self._session or session
            self._session = session
            self._state = SessionState.RESOLVED
            logger.info("InControl session ready for user %s", session.user_id)
            return session

    def _usable(self) -> Session | None:
        session = self._session
        if session is None:
            return None
        if session.is_expired:
            logger.info("InControl session expired; logging in again")
            self.invalidate()
            return None
        return session

    def _advance(self, lease: Lease, state: SessionState) -> None:
        if lease.is_current:
            self._state = state

    async def _construct(self, lease: Lease) -> Session:
        self._advance(lease, SessionState.AUTHENTICATING)
        token = await authenticate(self._client, self._username, self._password)
        session = Session.from_token(token)

        self._advance(lease, SessionState.REGISTERING)
        if not await register_device(self._client, self._username, session):
            raise AuthError(f"Device {self._client.device_id} registration was not confirmed")
        session = session.model_copy(update={"device_registered": True})

        self._advance(lease, SessionState.RESOLVING_USER)
        user_id = await resolve_user(self._client, self._username, session)
        return session.model_copy(update={"user_id": user_id})
