"""Authentication: credential check and per-request session identity.

Two strategies share one interface and are chosen once at startup:

* CredentialAuthenticator: identity comes only from a session cookie issued at login.
* AutoLoginAuthenticator: requests without a valid session run as a fixed guest.
"""

import logging
from abc import ABC, abstractmethod

import jwt

from poseidon.core.config import Settings
from poseidon.core.errors import InvalidCredentials
from poseidon.core.security import (
    create_session_token,
    decode_session_token,
    verify_password,
)
from poseidon.repositories.users import UserRepository
from poseidon.schemas.auth import SessionIdentity

logger = logging.getLogger(__name__)


class Authenticator(ABC):
    """Verifies credentials, issues session tokens and resolves the identity of a request."""

    mode: str

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def authenticate(
        self, users: UserRepository, username: str, password: str
    ) -> SessionIdentity:
        """
        Check username/password against the credential store.

        Raises InvalidCredentials for an unknown user and for a wrong password alike,
        so callers cannot tell which one happened.
        """
        user = users.find_by_username(username) if username else None
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login failed", extra={"actor": username or "-"})
            raise InvalidCredentials()
        logger.info("Login succeeded", extra={"actor": user.username})
        return SessionIdentity(username=user.username, roles=frozenset({user.role}))

    def issue_token(self, identity: SessionIdentity) -> str:
        return create_session_token(identity.username, sorted(identity.roles), self.settings)

    def identity_from_token(self, token: str | None) -> SessionIdentity | None:
        """Decode a session cookie; None when absent, expired, tampered or malformed."""
        if not token:
            return None
        try:
            payload = decode_session_token(token, self.settings)
        except jwt.PyJWTError:
            return None
        sub = payload.get("sub")
        roles = payload.get("roles")
        if not isinstance(sub, str) or not sub or not isinstance(roles, list):
            return None
        return SessionIdentity(username=sub, roles=frozenset(str(r) for r in roles))

    @abstractmethod
    def resolve(self, token: str | None) -> SessionIdentity | None:
        """Identity for a request carrying the given session cookie (or None if anonymous)."""


class CredentialAuthenticator(Authenticator):
    mode = "form"

    def resolve(self, token: str | None) -> SessionIdentity | None:
        return self.identity_from_token(token)


class AutoLoginAuthenticator(Authenticator):
    """Falls back to the configured guest identity instead of leaving a request anonymous."""

    mode = "auto"

    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)
        self.guest = SessionIdentity(
            username=settings.GUEST_USERNAME,
            roles=frozenset({settings.GUEST_ROLE}),
            guest=True,
        )

    def resolve(self, token: str | None) -> SessionIdentity | None:
        identity = self.identity_from_token(token)
        if identity is None:
            logger.debug("Automatically logged in user: %s", self.guest.username)
            return self.guest
        return identity


def build_authenticator(settings: Settings) -> Authenticator:
    """Pick the strategy from AUTH_ENABLED."""
    if settings.AUTH_ENABLED:
        return CredentialAuthenticator(settings)
    logger.warning(
        "AUTH_ENABLED is false: unauthenticated requests run as %s (%s)",
        settings.GUEST_USERNAME,
        settings.GUEST_ROLE,
    )
    return AutoLoginAuthenticator(settings)
