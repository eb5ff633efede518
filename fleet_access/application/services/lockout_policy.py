"""Lockout state machine: pure transitions over an account's login counters.

States (see LockoutState):
    OPEN      - below threshold, no active lock.
    LOCKED    - lock expiry in the future; authentication is rejected
                before the credential store is consulted.
    HALF_OPEN - lock expired, counter still non-zero.

Transitions:
    failure while OPEN      -> counter + 1; lock when counter reaches threshold.
    failure while HALF_OPEN -> counter = 1 (the current failure is the first
                               attempt of a new window), lock cleared.
    success from any state  -> counter = 0, lock cleared.

No I/O here; AccountService persists the returned LoginState with a
compare-and-swap write.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from fleet_access.application.dtos.account import LoginState
from fleet_access.core.config import Settings, get_settings
from fleet_access.domain.enums import LockoutState
from fleet_access.shared.utils.datetime import minutes_from

DEFAULT_THRESHOLD = 5
DEFAULT_DURATION_MINUTES = 120


@dataclass(frozen=True)
class LockoutPolicy:
    """Threshold and lock duration, plus the transition functions."""

    threshold: int = DEFAULT_THRESHOLD
    duration_minutes: int = DEFAULT_DURATION_MINUTES

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> LockoutPolicy:
        s = settings or get_settings()
        return cls(
            threshold=s.lockout_threshold,
            duration_minutes=s.lockout_duration_minutes,
        )

    @staticmethod
    def state(current: LoginState, now: datetime) -> LockoutState:
        """Classify current counters at instant now."""
        if current.lock_expires_at is not None and current.lock_expires_at > now:
            return LockoutState.LOCKED
        if current.lock_expires_at is not None and current.failed_attempts > 0:
            return LockoutState.HALF_OPEN
        return LockoutState.OPEN

    def register_failure(self, current: LoginState, now: datetime) -> LoginState:
        """Return the counters after one failed authentication.

        A still-locked account is returned unchanged; callers reject locked
        accounts before verifying, so this only matters for races.
        """
        if self.state(current, now) is LockoutState.LOCKED:
            return current
        if current.lock_expires_at is not None:
            # expired lock: start a new window with this failure as attempt one
            attempts = 1
        else:
            attempts = current.failed_attempts + 1
        lock_expires_at = None
        if attempts >= self.threshold:
            lock_expires_at = minutes_from(now, self.duration_minutes)
        return LoginState(failed_attempts=attempts, lock_expires_at=lock_expires_at)

    @staticmethod
    def register_success() -> LoginState:
        """Counters after a successful authentication: always fully reset."""
        return LoginState(failed_attempts=0, lock_expires_at=None)

    def just_locked(self, before: LoginState, after: LoginState, now: datetime) -> bool:
        """True when a failure moved the account from not-locked to LOCKED."""
        return (
            self.state(before, now) is not LockoutState.LOCKED
            and self.state(after, now) is LockoutState.LOCKED
        )
