"""
Lazy construction of expensive collaborators.

The Anthropic SDK client is only built the first time a deck is actually
requested, so `taboo play --mock` and `taboo prefs` never pay for it:

    class ClaudeClient:
        @lazy_property
        def client(self):
            from anthropic import Anthropic
            return Anthropic(api_key=self.api_key)

The first access builds and caches the value on the instance; later
accesses return the cached object. Tests can pre-seed the cache attribute
(`_client_cached`) to inject a fake.
"""

from functools import wraps
from typing import Any, Callable, cast


def lazy_property(import_func: Callable[..., Any]) -> Any:
    """Decorator for lazy-loaded, cached properties.

    Args:
        import_func: Method that imports and returns the dependency

    Returns:
        A property that builds the dependency once per instance
    """
    attr_name = f"_{import_func.__name__}_cached"

    @wraps(import_func)
    def wrapper(self: Any) -> Any:
        if not hasattr(self, attr_name):
            setattr(self, attr_name, import_func(self))
        return getattr(self, attr_name)

    return cast(Any, property(wrapper))
