DEFAULT_ROLE_CACHE_TTL = 300  # seconds
MAX_ROLE_CACHE_TTL = 3600

def normalize_ttl(ttl_raw):
    try:
        ttl = int(ttl_raw) if ttl_raw not in (None, '') else DEFAULT_ROLE_CACHE_TTL
    except (TypeError, ValueError):
        raise ValueError('ROLE_CACHE_TTL_SECONDS must be int')
    return max(0, min(ttl, MAX_ROLE_CACHE_TTL))
