"""Signed-in identity kept in step with the auth provider's session feed"""
from typing import Optional

from pydantic import ValidationError

from breadmade.core.auth import AuthEvent, Session, Subscription
from breadmade.core.exceptions import RemoteStoreError
from breadmade.models.user import User
from breadmade.schemas.auth import AuthResponse
from breadmade.services.auth_service import AuthService, build_user
from breadmade.utils.logger import logger


class AuthContext:
    """Identity of the process session, mirrored into the local cache.

    HTTP callers are resolved per request from their own bearer token; this
    context only follows the session the process itself signed in with.

    :meth:`start` restores the cached identity right away and subscribes to
    session changes; the current session is replayed as ``INITIAL_SESSION`` so
    the identity is re-validated against the profiles table. Every later
    change either rebuilds the identity from the profile row or clears it.
    """

    def __init__(self, auth_service: AuthService):
        self.auth_service = auth_service
        self.user: Optional[User] = None
        self.loading = True
        self._subscription: Optional[Subscription] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    async def start(self) -> None:
        self.user = self.auth_service.get_current_user()
        self.loading = False
        if self._subscription is None:
            self._subscription = self.auth_service.on_auth_state_change(self._on_auth_change)
        await self._on_auth_change(AuthEvent.INITIAL_SESSION, self.auth_service.get_session())

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _clear(self) -> None:
        self.user = None
        self.auth_service.clear_user()

    async def _on_auth_change(self, event: AuthEvent, session: Optional[Session]) -> None:
        if session is None:
            self._clear()
            return

        try:
            profile = await self.auth_service.fetch_profile(session.user.id, session.access_token)
        except (RemoteStoreError, ValidationError) as e:
            logger.warning(f"No profile for {session.user.id} on {event.value}: {e}")
            self._clear()
            return

        self.user = build_user(session.user, profile)
        self.auth_service.store_user(self.user)
        logger.debug(f"Identity synced on {event.value}: {self.user.email}")

    async def login(self, email: str, password: str) -> AuthResponse:
        response = await self.auth_service.login(email, password)
        if response.success and response.user:
            self.user = response.user
        return response

    async def signup(self, email: str, password: str, name: str) -> AuthResponse:
        response = await self.auth_service.signup(email, password, name)
        if response.success and response.user:
            self.user = response.user
        return response

    async def logout(self) -> None:
        await self.auth_service.logout()
        self.user = None
