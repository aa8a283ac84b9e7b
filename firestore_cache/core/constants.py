"""Core constants: cache key structure and budget conversion.

Single source of truth for cache key format (DRY). Used by
infrastructure.cache.keys and infrastructure.cache.memory_cache.
"""

# Delimiter between key segments (kind, collection, id or limit)
CACHE_KEY_SEP = ":"

# Kind tags that lead every key; document and query keys never collide
CACHE_PREFIX_DOCUMENT = "doc"
CACHE_PREFIX_QUERY = "query"

# Prefix of each filter segment in a query key: -<field>:<value>
CACHE_FILTER_PREFIX = "-"

# Written into query keys when no limit was given
CACHE_NO_LIMIT = 0

# Weight of one byte in megabytes; max_bytes = megabytes / CACHE_BYTE_WEIGHT_MB
CACHE_BYTE_WEIGHT_MB = 0.000001
