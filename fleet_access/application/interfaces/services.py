"""Service interfaces (ports) for the application layer."""

from typing import Protocol


# Credential store interface
class ICredentialStore(Protocol):
    """Protocol for secret hashing and verification.

    Methods are synchronous and CPU-bound; async callers run them via
    asyncio.to_thread.
    """

    def hash(self, secret: str) -> str:
        """Return a salted digest. Raises InvalidSecretException if too short."""

    def verify(self, secret: str, digest: str) -> bool:
        """Return True if secret matches digest. Malformed digest returns False."""

    def dummy_digest(self) -> str:
        """Return a valid digest of a throwaway secret, for equal-cost misses."""
