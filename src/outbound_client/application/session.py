"""Failure side effects: alerts, session teardown and redirects.

Each failed request is classified, then handled:

| classification | teardown | alert | redirect |
|---|---|---|---|
| ACCOUNT_SUSPENDED | yes | always | sign-in |
| EMAIL_NOT_VERIFIED | no | always | no |
| ACCOUNT_LOCKED | no | always | no |
| MAINTENANCE_MODE | no | once per cooldown | no |
| SESSION_EXPIRED | yes | once per cooldown | admin or standard sign-in |
| UNAUTHORIZED_GENERIC | yes | no | admin or standard sign-in |
| NETWORK_TIMEOUT / NETWORK_UNREACHABLE | no | no (logged) | no |
| UNCLASSIFIED | no | no | no |

Redirects are skipped when the user is already on a sign-in page.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from ..domain.classification import ErrorClassification, classify, default_message
from ..exceptions import ApiRequestError
from ..observability import get_logger
from ..protocols import AlertSink, Cache, Clock, Navigator, SessionStore
from ..types import FailureDetails

logger = get_logger("outbound_client.session")

DEFAULT_SIGN_IN_PATH = "/signin"
DEFAULT_ADMIN_SIGN_IN_PATH = "/admin-login"
DEFAULT_SESSION_ALERT_COOLDOWN_SECONDS = 5.0
DEFAULT_MAINTENANCE_ALERT_COOLDOWN_SECONDS = 10.0


@dataclass
class AlertCooldown:
    """Suppress repeat alerts of one category inside a cooldown window.

    idle -> shown(expires_at) on the first alert; back to idle once the clock
    passes expires_at, checked lazily on the next attempt.
    """

    cooldown_seconds: float
    clock: Clock = time.monotonic
    expires_at: float | None = field(default=None, init=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    @property
    def state(self) -> str:  # idle | shown
        if self.expires_at is not None and self.clock() < self.expires_at:
            return "shown"
        return "idle"

    def try_acquire(self) -> bool:
        """Return True (and enter `shown`) if an alert may be surfaced now."""
        with self._lock:
            now = self.clock()
            if self.expires_at is not None and now < self.expires_at:
                return False
            self.expires_at = now + self.cooldown_seconds
            return True

    def reset(self) -> None:
        with self._lock:
            self.expires_at = None


def _normalise_path(path: str) -> str:
    bare = path.split("?", 1)[0].split("#", 1)[0].rstrip("/")
    return bare or "/"


@dataclass
class SessionManager:
    """Classify failures and apply their side effects.

    `epoch` increments on every teardown so in-flight responses from an
    older session can be recognised. `epoch_lock` is held while tearing down
    and while a response is checked against the epoch and cached.
    """

    cache: Cache
    session: SessionStore
    alerts: AlertSink
    navigator: Navigator
    sign_in_path: str = DEFAULT_SIGN_IN_PATH
    admin_sign_in_path: str = DEFAULT_ADMIN_SIGN_IN_PATH
    session_alert_cooldown_seconds: float = DEFAULT_SESSION_ALERT_COOLDOWN_SECONDS
    maintenance_alert_cooldown_seconds: float = DEFAULT_MAINTENANCE_ALERT_COOLDOWN_SECONDS
    clock: Clock = time.monotonic
    epoch: int = field(default=0, init=False)
    epoch_lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False, compare=False
    )
    cooldowns: dict[ErrorClassification, AlertCooldown] = field(init=False)

    def __post_init__(self) -> None:
        self.cooldowns = {
            ErrorClassification.SESSION_EXPIRED: AlertCooldown(
                self.session_alert_cooldown_seconds, clock=self.clock
            ),
            ErrorClassification.MAINTENANCE_MODE: AlertCooldown(
                self.maintenance_alert_cooldown_seconds, clock=self.clock
            ),
        }

    def current_epoch(self) -> int:
        with self.epoch_lock:
            return self.epoch

    @property
    def entry_points(self) -> frozenset[str]:
        return frozenset(
            {_normalise_path(self.sign_in_path), _normalise_path(self.admin_sign_in_path)}
        )

    def handle_failure(self, failure: FailureDetails) -> ApiRequestError:
        """Apply the side effect for a failure and return the error to raise."""
        classification = classify(
            http_status=failure.http_status,
            application_code=failure.application_code,
            transport_failure=failure.transport_failure,
        )
        alert_text = failure.message or default_message(classification)

        match classification:
            case ErrorClassification.ACCOUNT_SUSPENDED:
                self.teardown(classification)
                self.alerts.show(alert_text)
                self._redirect(self.sign_in_path)
            case ErrorClassification.EMAIL_NOT_VERIFIED | ErrorClassification.ACCOUNT_LOCKED:
                self.alerts.show(alert_text)
            case ErrorClassification.MAINTENANCE_MODE:
                self._alert_once(classification, alert_text)
            case ErrorClassification.SESSION_EXPIRED:
                admin = self.session.is_admin()
                self.teardown(classification)
                self._alert_once(classification, alert_text)
                self._redirect(self.admin_sign_in_path if admin else self.sign_in_path)
            case ErrorClassification.UNAUTHORIZED_GENERIC:
                admin = self.session.is_admin()
                self.teardown(classification)
                self._redirect(self.admin_sign_in_path if admin else self.sign_in_path)
            case ErrorClassification.NETWORK_TIMEOUT | ErrorClassification.NETWORK_UNREACHABLE:
                logger.warning(
                    "%s: %s",
                    default_message(classification),
                    failure.message or classification.value,
                )
            case ErrorClassification.UNCLASSIFIED:
                pass

        return ApiRequestError(
            classification=classification,
            message=self._error_message(classification, failure),
            http_status=failure.http_status,
            application_code=failure.application_code,
            retry_after=failure.retry_after,
            data=failure.data,
            headers=failure.headers,
        )

    def teardown(self, reason: ErrorClassification) -> None:
        """Clear local session state and every cached response."""
        with self.epoch_lock:
            self.session.clear()
            self.cache.clear_all()
            self.epoch += 1
        logger.info("Session cleared after %s", reason.value)

    def _error_message(self, classification: ErrorClassification, failure: FailureDetails) -> str:
        if failure.message:
            return failure.message
        if failure.reason:
            return failure.reason
        if failure.http_status is not None and classification is ErrorClassification.UNCLASSIFIED:
            return f"Request failed with status {failure.http_status}"
        return default_message(classification)

    def _alert_once(self, classification: ErrorClassification, message: str) -> None:
        if self.cooldowns[classification].try_acquire():
            self.alerts.show(message)
        else:
            logger.debug("Suppressed duplicate %s alert", classification.value)

    def _redirect(self, path: str) -> None:
        if _normalise_path(self.navigator.current_path) in self.entry_points:
            logger.debug("Already on %s; not redirecting", self.navigator.current_path)
            return
        self.navigator.redirect(path)
