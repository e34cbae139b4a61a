# listings/services/__init__.py
from .lifecycle import ListingLifecycleManager, listing_lifecycle
from .favorites import FavoriteService, favorite_service

__all__ = [
    "ListingLifecycleManager",
    "listing_lifecycle",
    "FavoriteService",
    "favorite_service",
]
