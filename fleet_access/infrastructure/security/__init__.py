"""Security infrastructure: credential store (bcrypt) and JWT bearer tokens."""

from fleet_access.infrastructure.security.password import (
    BcryptCredentialStore,
    get_password_hash,
    verify_password,
)

__all__ = ["BcryptCredentialStore", "get_password_hash", "verify_password"]
