from typing import Optional, Any, Callable
from aiocache import SimpleMemoryCache, caches

from core.config import settings

# Cache expiration times (in seconds)
GEOCODING_EXPIRE = settings.geocoding_cache_ttl

# Configure default cache
caches.set_config({
    'default': {
        'cache': "aiocache.SimpleMemoryCache",
        'serializer': {
            'class': "aiocache.serializers.PickleSerializer"
        },
        'ttl': GEOCODING_EXPIRE,
    }
})

def get_cache() -> SimpleMemoryCache:
    """Get the default cache instance."""
    return caches.get('default')  # type: ignore

def city_cache_key_builder(
    func: Callable,
    *args: Any,
    **kwargs: Any,
) -> str:
    """Cache key builder for city lookups.

    Args:
        func: The function being cached
        args: Positional arguments passed to the function
        kwargs: Keyword arguments passed to the function

    Returns:
        str: Cache key in format {func}:{source}:city:{city}
    """
    city: Optional[str] = kwargs.get("city")
    if not city:
        # Bound methods also receive self positionally
        city = next((a for a in args if isinstance(a, str)), None)

    if not city:
        raise ValueError("city is required for caching")

    # Clients pointing at different geocoding APIs must not share entries
    source = getattr(args[0], "base_url", "") if args else ""

    return f"{func.__name__}:{source}:city:{city.strip().lower()}"
