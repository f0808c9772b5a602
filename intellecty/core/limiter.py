"""SlowAPI limiter shared by main (app.state.limiter) and the route modules.

Limits are per client address. Decorated routes must accept a
``request: Request`` parameter.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

WRITE_ENDPOINT_LIMIT = "120/minute"
FORECAST_LIMIT = "60/minute"
UPLOAD_LIMIT = "30/minute"

limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
limit_forecasts = limiter.limit(FORECAST_LIMIT)
limit_upload = limiter.limit(UPLOAD_LIMIT)
