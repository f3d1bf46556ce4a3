"""
Session lifecycle for the Stock UI.

SessionStore is the single source of truth for who is logged in. It owns
the Session snapshot, the durable token entry and the credential installed
on the StockService. The lifecycle is:

    UNKNOWN -> VERIFYING -> AUTHENTICATED | UNAUTHENTICATED

An authenticated session drops to UNAUTHENTICATED on logout or when the
token fails verification. Only ``login`` leaves UNAUTHENTICATED.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from stock_ui import config
from stock_ui.controllers.observable import Observable
from stock_ui.errors import AuthError, StockUIError
from stock_ui.forms import validate_credentials, validate_registration
from stock_ui.lib import logs
from stock_ui.lib.caches import DiskCache
from stock_ui.models.stock import User
from stock_ui.services.stock_service import StockService

LOG = logs.logger(__file__)


class SessionStatus(str, Enum):
    UNKNOWN = "unknown"
    VERIFYING = "verifying"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True, slots=True)
class Session:
    """
    Snapshot of the authentication state.

    Invariants: AUTHENTICATED implies both token and user are present;
    UNAUTHENTICATED implies neither is.
    """

    status: SessionStatus = SessionStatus.UNKNOWN
    token: str | None = None
    user: User | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED

    @property
    def is_resolved(self) -> bool:
        return self.status in (SessionStatus.AUTHENTICATED, SessionStatus.UNAUTHENTICATED)


class TokenStorage(ABC):
    """Durable home of the bearer token: one key-value entry."""

    @abstractmethod
    def load(self) -> str | None:
        """Return the stored token, if any."""

    @abstractmethod
    def save(self, token: str) -> None:
        """Persist the token, replacing any previous one."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored token. Idempotent."""


class MemoryTokenStorage(TokenStorage):
    """Token storage that lives as long as the process."""

    def __init__(self, token: str | None = None) -> None:
        self.token = token

    def load(self) -> str | None:
        return self.token

    def save(self, token: str) -> None:
        self.token = token

    def clear(self) -> None:
        self.token = None


class DiskTokenStorage(TokenStorage):
    """
    Token storage backed by the on-disk cache.

    Attributes:
        key: Cache key of the token entry. Namespaced per browser by the
            Reflex layer so separate browsers keep separate sessions.
        ttl: Seconds the entry is kept, matching the token lifetime.
    """

    def __init__(
        self,
        cache: DiskCache,
        key: str = config.TOKEN_KEY,
        ttl: float | None = config.TOKEN_TTL_SECONDS,
    ) -> None:
        self._cache = cache
        self.key = key
        self.ttl = ttl

    def load(self) -> str | None:
        entry = self._cache.get(self.key)
        return entry.value if entry else None

    def save(self, token: str) -> None:
        self._cache.set(self.key, token, expire=self.ttl)

    def clear(self) -> None:
        self._cache.delete(self.key)


class SessionStore(Observable[Session]):
    """
    Owns the Session and every mutation of the request credential.

    Args:
        service: Service whose default credential this store manages.
        storage: Durable token storage.
    """

    def __init__(self, service: StockService, storage: TokenStorage) -> None:
        super().__init__(Session())
        self.service = service
        self.storage = storage
        self._initialized = False

    @property
    def session(self) -> Session:
        return self.state

    async def init(self) -> Session:
        """
        Restore the session from durable storage.

        Runs once; later calls return the current snapshot untouched.
        """
        if self._initialized:
            return self.state
        self._initialized = True

        token = self.storage.load()
        if not token:
            LOG.info("No stored token")
            self._set_state(Session(status=SessionStatus.UNAUTHENTICATED))
            return self.state

        self.service.set_credential(token)
        self._set_state(Session(status=SessionStatus.VERIFYING, token=token))
        try:
            user = await self.service.me()
        except Exception as e:
            LOG.warning("Stored token could not be verified, logging out: %s", e)
            self.logout()
            return self.state
        # A logout while verifying wins over a late verification.
        if self.state.status is SessionStatus.VERIFYING and self.state.token == token:
            self._set_state(
                Session(status=SessionStatus.AUTHENTICATED, token=token, user=user)
            )
        return self.state

    async def login(self, token: str) -> User:
        """
        Establish a session for ``token``.

        Raises:
            AuthError: If the user lookup fails. The session is logged out
                before raising, so no half-established state survives.
        """
        self._initialized = True
        self.storage.save(token)
        self.service.set_credential(token)
        self._set_state(Session(status=SessionStatus.VERIFYING, token=token))
        try:
            user = await self.service.me()
        except Exception as e:
            LOG.warning("Login verification failed: %s", e)
            self.logout()
            message = e.message if isinstance(e, StockUIError) else "Could not verify the login"
            raise AuthError(message) from e
        self._set_state(Session(status=SessionStatus.AUTHENTICATED, token=token, user=user))
        LOG.info("Logged in as %s", user.email)
        return user

    def logout(self) -> None:
        """Clear user, durable token and credential. Idempotent."""
        self.storage.clear()
        self.service.clear_credential()
        self._set_state(Session(status=SessionStatus.UNAUTHENTICATED))

    async def authenticate(self, email: str, password: str) -> User:
        """
        Log in with email and password.

        Raises:
            ValidationError: If the form is incomplete; nothing is sent.
            AuthError: If the back end rejects the credentials.
        """
        email, password = validate_credentials(email, password)
        try:
            token = await self.service.login(email, password)
        except AuthError:
            raise
        except StockUIError as e:
            raise AuthError(e.message) from e
        return await self.login(token)

    async def register(self, email: str, password: str, password_confirm: str) -> None:
        """
        Create an account. Does not log in.

        Raises:
            ValidationError: If the form fails local checks; nothing is sent.
        """
        email, password, password_confirm = validate_registration(
            email, password, password_confirm
        )
        await self.service.register(email, password, password_confirm)
        LOG.info("Registered %s", email)
