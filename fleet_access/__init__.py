"""Fleet Access: account, lockout, permission and tenancy-scope core for fleet management."""

__version__ = "1.0.0"
