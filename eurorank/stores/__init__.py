"""Group stores for shared ranking groups."""

import os

from .base import GroupNotFound, GroupStore, StoreError

# Store registry - import stores here to register them
_stores: dict[str, type[GroupStore]] = {}

DEFAULT_STORE = "memory"


def register_store(name: str):
    """Decorator to register a group store class under a name."""
    def decorator(store_class: type[GroupStore]) -> type[GroupStore]:
        _stores[name] = store_class
        return store_class
    return decorator


def get_store_names() -> list[str]:
    """Return the names of all registered stores."""
    return list(_stores)


def create_store(name: str | None = None, **kwargs) -> GroupStore:
    """Instantiate a registered store.

    The name defaults to the EURORANK_STORE environment variable, then to
    "memory".
    """
    name = name or os.environ.get("EURORANK_STORE") or DEFAULT_STORE
    try:
        store_class = _stores[name]
    except KeyError:
        raise StoreError(
            f"Unknown group store {name!r}; available: {', '.join(_stores) or 'none'}"
        ) from None
    return store_class(**kwargs)


# Import stores to register them
from . import http  # noqa: E402, F401
from . import memory  # noqa: E402, F401

__all__ = [
    "GroupNotFound",
    "GroupStore",
    "StoreError",
    "create_store",
    "get_store_names",
    "register_store",
]
