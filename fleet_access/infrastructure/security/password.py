"""Credential store: password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a fixed-length
input so long passwords are not silently truncated. Each hash uses a fresh random
salt, so hashing the same password twice gives different digests that both verify.
Plaintext passwords are never logged.
"""

import base64
import hashlib
import logging

import bcrypt

from fleet_access.core.config import Settings, get_settings
from fleet_access.domain.exceptions import InvalidSecretException

logger = logging.getLogger(__name__)

# Lazy dummy hash for equal-cost comparison when an account is not found.
_dummy_hash_cache: str | None = None


def _prehash(password: str) -> bytes:
    """SHA-256 pre-hash to avoid bcrypt's 72-byte truncation."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password.

    A malformed or empty digest returns False instead of raising.
    """
    if not hashed_password:
        return False
    try:
        result = bcrypt.checkpw(
            _prehash(plain_password),
            hashed_password.encode("utf-8"),
        )
        return bool(result)
    except (ValueError, TypeError):
        logger.error("Stored password digest is malformed; treating as no match")
        return False


def get_password_hash(password: str, rounds: int = 12) -> str:
    """Return bcrypt hash of password (SHA-256 pre-hashed before bcrypt)."""
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(_prehash(password), salt)
    return hashed.decode("utf-8")


class BcryptCredentialStore:
    """ICredentialStore backed by bcrypt. Enforces the minimum password length."""

    def __init__(self, settings: Settings | None = None) -> None:
        s = settings or get_settings()
        self.min_length = s.password_min_length
        self.rounds = s.bcrypt_rounds

    def hash(self, secret: str) -> str:
        """Return a salted digest.

        Raises:
            InvalidSecretException: If secret is empty or shorter than min_length.
        """
        if not secret or len(secret) < self.min_length:
            raise InvalidSecretException(self.min_length)
        return get_password_hash(secret, rounds=self.rounds)

    def verify(self, secret: str, digest: str) -> bool:
        return verify_password(secret or "", digest)

    def dummy_digest(self) -> str:
        """Valid digest of a throwaway password; computed once per process."""
        global _dummy_hash_cache
        if _dummy_hash_cache is None:
            _dummy_hash_cache = get_password_hash(
                "not-a-real-password", rounds=self.rounds
            )
        return _dummy_hash_cache
