"""
Authentication.

Resolves the principal behind a Supabase access token and signs users in
and out. The caller resolves a Session once and passes it to every note
operation; nothing here keeps a global "current user".

Usage:
    auth = AuthService(client)
    session = await auth.sign_in("me@example.com", "secret")
    outcome = await NoteService(client).list_notes(session)
"""

from dataclasses import dataclass

from notekeeper.core.exceptions import AuthenticationError
from notekeeper.core.logging import get_logger, log_with_source
from notekeeper.core.supabase import SupabaseClient, error_message

logger = get_logger(__name__)


@dataclass(frozen=True)
class Principal:
    """An authenticated user as reported by the auth endpoint."""

    id: str
    email: str | None = None


@dataclass(frozen=True)
class Session:
    """Access token plus the principal it resolved to (None if unauthenticated)."""

    access_token: str | None
    principal: Principal | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None

    @property
    def user_id(self) -> str | None:
        return self.principal.id if self.principal else None

    @classmethod
    def anonymous(cls) -> "Session":
        return cls(access_token=None, principal=None)


def _principal_from_user(user: dict) -> Principal | None:
    user_id = user.get("id") if isinstance(user, dict) else None
    if not user_id:
        return None
    return Principal(id=str(user_id), email=user.get("email"))


class AuthService:
    """Thin wrapper over the GoTrue endpoints used by the notes client."""

    def __init__(self, client: SupabaseClient) -> None:
        self.client = client

    async def sign_in(self, email: str, password: str) -> Session:
        """
        Sign in with email and password.

        Returns:
            Session carrying the access token and resolved principal

        Raises:
            AuthenticationError: If the credentials are rejected
        """
        response = await self.client.auth(
            "POST",
            "token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )

        if response.status_code != 200:
            message = error_message(response)
            log_with_source(
                logger, "auth", "warning", "Sign in rejected",
                status_code=response.status_code, error=message,
            )
            raise AuthenticationError(f"Sign in failed: {message}")

        body = response.json()
        principal = _principal_from_user(body.get("user") or {})
        if principal is None:
            raise AuthenticationError("Sign in response did not include a user")

        log_with_source(logger, "auth", "info", "Signed in", user_id=principal.id)
        return Session(access_token=body.get("access_token"), principal=principal)

    async def get_principal(self, access_token: str | None) -> Principal | None:
        """
        Resolve the principal for an access token.

        Returns None when there is no token or the token is not accepted,
        which callers treat as "unauthenticated".

        Raises:
            AuthenticationError: If the auth endpoint fails for another reason
        """
        if not access_token:
            return None

        response = await self.client.auth("GET", "user", access_token)

        if response.status_code in (401, 403):
            log_with_source(
                logger, "auth", "warning", "Access token rejected",
                status_code=response.status_code,
            )
            return None
        if response.status_code != 200:
            raise AuthenticationError(
                f"Could not resolve user: {error_message(response)}"
            )

        return _principal_from_user(response.json())

    async def resolve_session(self, access_token: str | None) -> Session:
        """Build a Session for an existing access token."""
        principal = await self.get_principal(access_token)
        return Session(access_token=access_token, principal=principal)

    async def sign_out(self, session: Session) -> Session:
        """
        Revoke the session's token.

        Returns:
            An anonymous session to continue with. No request is made when
            the session has no token.

        Raises:
            AuthenticationError: If the logout endpoint rejects the call
        """
        if not session.access_token:
            return Session.anonymous()

        response = await self.client.auth("POST", "logout", session.access_token)
        if response.status_code not in (200, 204):
            raise AuthenticationError(f"Sign out failed: {error_message(response)}")

        log_with_source(logger, "auth", "info", "Signed out", user_id=session.user_id)
        return Session.anonymous()
