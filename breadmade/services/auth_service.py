"""Authentication and authorization service"""
from datetime import datetime
from typing import Optional

from pydantic import ValidationError

from breadmade.core.auth import AuthChangeCallback, AuthClient, AuthUser, Session, Subscription
from breadmade.core.cache import LocalCache
from breadmade.core.config import settings
from breadmade.core.database import RemoteStore
from breadmade.core.exceptions import AuthError, RemoteStoreError
from breadmade.models.user import Profile, User, UserRole
from breadmade.schemas.auth import AuthResponse
from breadmade.services.base import parse_row, utc_now, utc_now_iso
from breadmade.utils.logger import logger

USER_CACHE_KEY = "auth_user"


def is_admin_user(user: Optional[User]) -> bool:
    """
    Check if a user is an admin based on role

    Args:
        user: User object to check

    Returns:
        True if user is admin, False otherwise
    """
    if not user:
        return False

    admin_roles = getattr(settings, "ADMIN_ROLES", [UserRole.ADMIN.value])
    if user.role.value in admin_roles:
        logger.debug(f"Admin access granted to {user.email}")
        return True

    logger.debug(f"Not admin: {user.email} has role '{user.role.value}'")
    return False


def check_admin_access(user: Optional[User]) -> bool:
    """
    Validate admin access for a user

    Args:
        user: User object to validate

    Returns:
        True if user has admin access, False otherwise
    """
    return is_admin_user(user)


def require_admin(user: Optional[User]) -> None:
    """
    Raise exception if user is not admin

    Args:
        user: User object to check

    Raises:
        PermissionError: If user is not admin
    """
    if not is_admin_user(user):
        user_email = user.email if user else "Unknown"
        raise PermissionError(f"Access denied. Admin privileges required. User: {user_email}")


def build_user(auth_user: AuthUser, profile: Optional[Profile] = None, name: Optional[str] = None) -> User:
    """
    Combine the provider's user and the profile row into one identity

    The display name falls back from the profile to the signup metadata and
    finally to the email; timestamps fall back from the profile to the
    provider user and then to now.
    """
    email = auth_user.email or (profile.email if profile else None) or ""
    metadata_name = auth_user.user_metadata.get("name")
    now = utc_now()

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    role = None
    if profile is not None:
        name = name or profile.name or profile.display_name
        created_at = profile.created_at
        updated_at = profile.updated_at
        role = profile.role

    return User(
        id=auth_user.id,
        email=email,
        name=name or metadata_name or email,
        role=role or UserRole.USER,
        created_at=created_at or auth_user.created_at or now,
        updated_at=updated_at or auth_user.updated_at or now,
    )


class AuthService:
    """Login, signup and logout on top of the auth provider and the profiles table

    ``persist=True`` calls act on the process session and the local identity
    cache. HTTP callers pass ``persist=False`` and carry the returned access
    token themselves, which :meth:`resolve_user` turns back into a user.
    """

    def __init__(self, auth_client: AuthClient, store: RemoteStore, cache: LocalCache):
        self.auth_client = auth_client
        self.store = store
        self.cache = cache

    async def fetch_profile(self, user_id: str, access_token: Optional[str] = None) -> Profile:
        """
        Fetch the profile row for an auth user

        Raises:
            RemoteStoreError: If the row is missing or the store fails
        """
        store = self.store.with_access_token(access_token) if access_token else self.store
        result = await (
            store.table("profiles")
            .select("*")
            .eq("id", user_id)
            .single()
            .execute()
        )
        return parse_row(Profile, result.data)

    async def resolve_user(self, access_token: str) -> Optional[User]:
        """
        Identity behind an access token

        Returns:
            The user with its profile role, or None when the token is
            rejected or the profile cannot be read
        """
        try:
            auth_user = await self.auth_client.get_user(access_token)
        except AuthError as e:
            logger.info(f"Rejected access token: {e.message}")
            return None

        try:
            profile = await self.fetch_profile(auth_user.id, access_token)
        except (RemoteStoreError, ValidationError) as e:
            logger.warning(f"No readable profile for {auth_user.id}: {e}")
            return None
        return build_user(auth_user, profile)

    def store_user(self, user: User) -> None:
        self.cache.set(USER_CACHE_KEY, user.model_dump(mode="json"))

    def clear_user(self) -> None:
        self.cache.remove(USER_CACHE_KEY)

    def get_current_user(self) -> Optional[User]:
        """Identity persisted by the last successful login, if any"""
        raw = self.cache.get(USER_CACHE_KEY)
        if not raw:
            return None
        try:
            return User.model_validate(raw)
        except ValidationError as e:
            logger.error(f"Error parsing stored user: {e}")
            return None

    def get_session(self) -> Optional[Session]:
        return self.auth_client.get_session()

    def on_auth_state_change(self, callback: AuthChangeCallback) -> Subscription:
        return self.auth_client.on_auth_state_change(callback)

    async def login(self, email: str, password: str, persist: bool = True) -> AuthResponse:
        """
        Sign in and load the matching profile

        Args:
            email: Account email
            password: Account password
            persist: Keep the session and identity for this process

        Returns:
            AuthResponse with the normalized user and access token, or the failure message
        """
        logger.info(f"Attempting login for {email}")
        try:
            session = await self.auth_client.sign_in_with_password(email, password, persist=persist)
        except AuthError as e:
            logger.error(f"Login error for {email}: {e.message}")
            return AuthResponse(success=False, error=e.message)

        try:
            profile = await self.fetch_profile(session.user.id, session.access_token)
        except RemoteStoreError as e:
            logger.error(f"Profile fetch error for {email}: {e.message}")
            return AuthResponse(success=False, error=e.message)
        except ValidationError as e:
            logger.error(f"Unreadable profile for {email}: {e}")
            return AuthResponse(success=False, error="Login failed")

        user = build_user(session.user, profile)
        if persist:
            self.store_user(user)
        logger.info(f"User logged in: {user.email} ({user.role.value})")
        return AuthResponse(success=True, user=user, access_token=session.access_token)

    async def signup(self, email: str, password: str, name: str, persist: bool = True) -> AuthResponse:
        """
        Register an account and create its profile row

        A failed profile insert is logged; the signup still succeeds. The
        access token is only present when the provider opened a session.

        Returns:
            AuthResponse with the new user, or the failure message
        """
        logger.info(f"Attempting signup for {email}")
        try:
            auth_user, session = await self.auth_client.sign_up(email, password, {"name": name}, persist=persist)
        except AuthError as e:
            logger.error(f"Signup error for {email}: {e.message}")
            return AuthResponse(success=False, error=e.message)

        access_token = session.access_token if session else None
        store = self.store.with_access_token(access_token) if access_token else self.store
        now = utc_now_iso()
        try:
            await store.table("profiles").insert({
                "id": auth_user.id,
                "email": email,
                "name": name,
                "role": UserRole.USER.value,
                "created_at": now,
                "updated_at": now,
            }).execute()
        except RemoteStoreError as e:
            logger.error(f"Profile creation error for {email}: {e.message}")

        user = build_user(auth_user, name=name)
        if persist:
            self.store_user(user)
        logger.info(f"User signed up: {user.email}")
        return AuthResponse(success=True, user=user, access_token=access_token)

    async def logout(self, access_token: Optional[str] = None) -> None:
        """
        Sign out; failures are only logged

        Without a token the process session ends and the stored identity is
        dropped. With a token only that caller's session is revoked.
        """
        try:
            if access_token:
                await self.auth_client.revoke(access_token)
            else:
                await self.auth_client.sign_out()
        except AuthError as e:
            logger.error(f"Logout error: {e.message}")
        finally:
            if not access_token:
                self.clear_user()
