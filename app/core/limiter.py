"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and view modules (e.g. auth) can use
the same instance without circular imports. Central limit strings and
decorators keep rate limits DRY.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
LOGIN_LIMIT = "10/minute"
REGISTER_LIMIT = "5/minute"
UPLOAD_LIMIT = "30/minute"

limit_login = limiter.limit(LOGIN_LIMIT)
limit_register = limiter.limit(REGISTER_LIMIT)
limit_upload = limiter.limit(UPLOAD_LIMIT)
