"""Client for the hosted auth provider and its session-change feed"""
import enum
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import httpx
from pydantic import BaseModel, Field, ValidationError

from breadmade.core.cache import LocalCache
from breadmade.core.config import Settings
from breadmade.core.exceptions import AuthError
from breadmade.utils.logger import logger

SESSION_CACHE_KEY = "auth_session"


class AuthEvent(str, enum.Enum):
    """Session-change event names"""
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


class AuthUser(BaseModel):
    """User object returned by the auth provider"""
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Session(BaseModel):
    """Authenticated session"""
    access_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    user: AuthUser


AuthChangeCallback = Callable[[AuthEvent, Optional[Session]], Awaitable[None]]


class Subscription:
    """Handle returned by :meth:`AuthClient.on_auth_state_change`"""

    def __init__(self, client: "AuthClient", callback: AuthChangeCallback):
        self._client = client
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._client._remove_listener(self)
            self.active = False


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return f"Auth request failed with status {response.status_code}"
    if isinstance(payload, dict):
        for key in ("msg", "error_description", "message", "error"):
            if payload.get(key):
                return str(payload[key])
    return f"Auth request failed with status {response.status_code}"


class AuthClient:
    """Password auth against the hosted provider.

    The current session is kept in memory and mirrored into the local cache so
    a restarted process can pick it up again. Listeners registered with
    :meth:`on_auth_state_change` are awaited in registration order whenever the
    session changes.
    """

    def __init__(
        self,
        settings: Settings,
        client: Optional[httpx.AsyncClient] = None,
        cache: Optional[LocalCache] = None,
    ):
        self.settings = settings
        self.auth_url = settings.auth_url
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT)
        self.cache = cache
        self._session: Optional[Session] = None
        self._listeners: List[Subscription] = []
        self._restore_session()

    def _restore_session(self) -> None:
        if self.cache is None:
            return
        raw = self.cache.get(SESSION_CACHE_KEY)
        if not raw:
            return
        try:
            self._session = Session.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable cached session: {e}")
            self.cache.remove(SESSION_CACHE_KEY)

    def _headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        return {
            "apikey": self.settings.SUPABASE_ANON_KEY,
            "Authorization": f"Bearer {access_token or self.settings.SUPABASE_ANON_KEY}",
        }

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[dict] = None,
        access_token: Optional[str] = None,
    ) -> httpx.Response:
        try:
            response = await self.client.request(
                method,
                f"{self.auth_url}/{path}",
                json=payload if method != "GET" else None,
                headers=self._headers(access_token),
            )
        except httpx.HTTPError as e:
            raise AuthError(f"Network error: {e}") from e

        if response.status_code >= 400:
            raise AuthError(_error_message(response), response.status_code)
        return response

    async def _post(self, path: str, payload: Optional[dict] = None, access_token: Optional[str] = None) -> httpx.Response:
        return await self._request("POST", path, payload or {}, access_token)

    def _store_session(self, session: Optional[Session]) -> None:
        self._session = session
        if self.cache is None:
            return
        if session is None:
            self.cache.remove(SESSION_CACHE_KEY)
        else:
            self.cache.set(SESSION_CACHE_KEY, session.model_dump(mode="json"))

    def get_session(self) -> Optional[Session]:
        return self._session

    async def get_user(self, access_token: str) -> AuthUser:
        """
        Look up the user an access token belongs to

        Raises:
            AuthError: If the token is invalid or expired, or the provider is unreachable
        """
        response = await self._request("GET", "user", access_token=access_token)
        try:
            return AuthUser.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise AuthError(f"Unexpected user response: {e}") from e

    async def sign_in_with_password(self, email: str, password: str, persist: bool = True) -> Session:
        """
        Sign in with email and password

        With ``persist=False`` the session is only returned; the process
        session and its listeners are left alone.

        Returns:
            The new session

        Raises:
            AuthError: If the provider rejects the credentials or is unreachable
        """
        response = await self._post(
            "token?grant_type=password",
            {"email": email, "password": password},
        )
        try:
            session = Session.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise AuthError(f"Unexpected sign-in response: {e}") from e

        if persist:
            self._store_session(session)
            await self._notify(AuthEvent.SIGNED_IN, session)
        return session

    async def sign_up(
        self,
        email: str,
        password: str,
        data: Optional[Dict[str, Any]] = None,
        persist: bool = True,
    ) -> Tuple[AuthUser, Optional[Session]]:
        """
        Register a new account

        The provider answers with a full session when email confirmation is
        disabled, otherwise with the bare user.

        Returns:
            Tuple of (user, session or None)
        """
        response = await self._post(
            "signup",
            {"email": email, "password": password, "data": data or {}},
        )
        try:
            payload = response.json()
            if "access_token" in payload:
                session = Session.model_validate(payload)
                user = session.user
            else:
                session = None
                user = AuthUser.model_validate(payload.get("user", payload))
        except (ValueError, AttributeError, ValidationError) as e:
            raise AuthError(f"Unexpected sign-up response: {e}") from e

        if persist and session is not None:
            self._store_session(session)
            await self._notify(AuthEvent.SIGNED_IN, session)
        return user, session

    async def revoke(self, access_token: str) -> None:
        """End a remote session that is not the process session"""
        await self._post("logout", access_token=access_token)

    async def sign_out(self) -> None:
        """End the remote session; the local session is dropped even if the call fails"""
        session = self._session
        try:
            if session is not None:
                await self._post("logout", access_token=session.access_token)
        finally:
            self._store_session(None)
            await self._notify(AuthEvent.SIGNED_OUT, None)

    def on_auth_state_change(self, callback: AuthChangeCallback) -> Subscription:
        subscription = Subscription(self, callback)
        self._listeners.append(subscription)
        return subscription

    def _remove_listener(self, subscription: Subscription) -> None:
        if subscription in self._listeners:
            self._listeners.remove(subscription)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def _notify(self, event: AuthEvent, session: Optional[Session]) -> None:
        for subscription in list(self._listeners):
            try:
                await subscription.callback(event, session)
            except Exception as e:
                logger.error(f"Auth listener failed on {event.value}: {e}", exc_info=True)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
