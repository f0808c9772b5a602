"""Core constants: cache key namespaces and shared literal values.

Single source of truth for cache key structure. Used by
intellecty.infrastructure.cache.keys and the services that cache results.
"""

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Suffix appended to a guarded key to form its lock key
CACHE_LOCK_SUFFIX = "lock"

# Tenant part used for data shared by all tenants (external API responses)
GLOBAL_TENANT = "global"

# Cache key namespaces (second key component, after the tenant)
CACHE_NS_SESSION = "session"
CACHE_NS_FORECAST = "forecast"
CACHE_NS_INVENTORY = "inventory"
CACHE_NS_EXTERNAL_API = "api"
CACHE_NS_ANALYTICS = "analytics"
CACHE_NS_MODEL = "model"
CACHE_NS_UPLOAD = "upload"
CACHE_NS_USAGE = "usage"

# Length of the hex digest appended by secure cache keys
SECURE_KEY_DIGEST_LENGTH = 16

# Demo demand assumption used by the inventory endpoints (units per day)
AVG_DAILY_DEMAND = 5

# Allowance for multipart boundaries and part headers on top of max_upload_size
MULTIPART_OVERHEAD_BYTES = 64 * 1024
