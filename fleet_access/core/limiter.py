"""Rate limiter instance for SlowAPI.

Shared so main (app.state.limiter) and the auth routes use the same instance
without circular imports. Complements account lockout: lockout bounds guesses
per account, the limiter bounds attempts per client address across accounts.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

LOGIN_LIMIT = "10/minute"

limit_auth = limiter.limit(LOGIN_LIMIT)
