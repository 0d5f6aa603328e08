"""Bearer-token resolution and session-state reads.

The token lives in one of two places owned by the host application: a flat
primary key, or nested under `state.token` in a persisted JSON session blob.
A blob that is missing, malformed or lacks the nested path resolves to
`TokenNotFound`; it never aborts the request.

Usage example:
    from outbound_client.infrastructure.auth import TokenResolver
    from outbound_client.infrastructure.storage import InMemoryStorage

    resolver = TokenResolver(storage=InMemoryStorage({"token": "abc"}))
    resolver.resolve()  # TokenFound(token="abc", source="token")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing_extensions import override

from ..observability import get_logger
from ..protocols import CredentialSource, KeyValueStorage, SessionStore
from .io.validation import (
    IncomingDataError,
    SessionBlobInput,
    StoredUserInput,
    parse_session_blob,
    parse_stored_user,
    validate_as,
)

logger = get_logger("outbound_client.infrastructure.auth")

DEFAULT_TOKEN_KEY = "token"
DEFAULT_SESSION_BLOB_KEY = "auth-storage"
DEFAULT_USER_KEY = "user"
ADMIN_ROLE = "ADMIN"


@dataclass(frozen=True)
class TokenFound:
    token: str
    source: str


@dataclass(frozen=True)
class TokenNotFound:
    reason: str = "absent"


TokenLookup = TokenFound | TokenNotFound


def _clean(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


@dataclass(frozen=True)
class SessionKeys:
    """Storage keys that make up a signed-in session."""

    token_key: str = DEFAULT_TOKEN_KEY
    session_blob_key: str = DEFAULT_SESSION_BLOB_KEY
    user_key: str = DEFAULT_USER_KEY

    def all(self) -> tuple[str, ...]:
        return (self.token_key, self.session_blob_key, self.user_key)


@dataclass
class TokenResolver(CredentialSource):
    """Resolve the bearer token from primary then secondary storage."""

    storage: KeyValueStorage
    keys: SessionKeys = SessionKeys()

    def resolve(self) -> TokenLookup:
        primary = _clean(self.storage.get_item(self.keys.token_key))
        if primary is not None:
            return TokenFound(token=primary, source=self.keys.token_key)

        raw_blob = self.storage.get_item(self.keys.session_blob_key)
        if raw_blob is None:
            return TokenNotFound()
        try:
            blob = parse_session_blob(raw_blob)
        except IncomingDataError:
            logger.debug("Session blob %s is not valid JSON; ignoring", self.keys.session_blob_key)
            return TokenNotFound(reason="unparseable session blob")
        token = _clean((blob.get("state") or {}).get("token"))
        if token is None:
            return TokenNotFound(reason="no token in session blob")
        return TokenFound(token=token, source=self.keys.session_blob_key)

    @override
    def authorization_header(self) -> dict[str, str]:
        """Return the Authorization header for the current token, if any."""
        match self.resolve():
            case TokenFound(token=token):
                return {"Authorization": f"Bearer {token}"}
            case TokenNotFound():
                return {}


@dataclass
class SessionState(SessionStore):
    """Reads and tears down the host application's session storage."""

    storage: KeyValueStorage
    keys: SessionKeys = SessionKeys()

    def _user(self) -> StoredUserInput | None:
        raw_user = self.storage.get_item(self.keys.user_key)
        if raw_user is not None:
            try:
                return parse_stored_user(raw_user)
            except IncomingDataError:
                logger.debug("Stored user %s is not valid JSON; ignoring", self.keys.user_key)

        raw_blob = self.storage.get_item(self.keys.session_blob_key)
        if raw_blob is None:
            return None
        try:
            blob: SessionBlobInput = parse_session_blob(raw_blob)
            nested = (blob.get("state") or {}).get("user")
            if nested is None:
                return None
            return validate_as(StoredUserInput, nested)
        except IncomingDataError:
            return None

    @override
    def is_admin(self) -> bool:
        """Return True when the stored user carries the admin role."""
        user = self._user()
        if user is None:
            return False
        role = _clean(user.get("role"))
        return role is not None and role.upper() == ADMIN_ROLE

    @override
    def clear(self) -> None:
        for key in self.keys.all():
            self.storage.remove_item(key)
