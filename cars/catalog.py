# cars/catalog.py
import logging

import requests
from django.conf import settings
from django.core.cache import cache

from .data import CAR_BRANDS

logger = logging.getLogger(__name__)

CATALOG_CACHE_KEY = "cars:catalog"


class CarCatalogError(Exception):
    """Raised when the external brand/model catalog cannot be fetched."""
    pass


def _find_brand(brand_id):
    return next((brand for brand in CAR_BRANDS if brand["id"] == brand_id), None)


def get_brand_name(brand_id):
    """Display name for a catalog brand id; unknown ids are returned as-is."""
    brand = _find_brand(brand_id)
    return brand["name"] if brand else brand_id


def get_model_name(brand_id, model_id):
    brand = _find_brand(brand_id)
    if not brand:
        return model_id
    model = next((m for m in brand["models"] if m["id"] == model_id), None)
    return model["name"] if model else model_id


def list_brands():
    return [
        {key: value for key, value in brand.items() if key != "models"}
        for brand in CAR_BRANDS
    ]


def fetch_catalog(force_refresh=False):
    """
    Fetch the full brand/model catalog from the external provider.

    The response is cached; a failed fetch is never cached.
    """
    if not force_refresh:
        cached = cache.get(CATALOG_CACHE_KEY)
        if cached is not None:
            return cached

    try:
        response = requests.get(
            settings.CAR_CATALOG_URL, timeout=settings.CAR_CATALOG_TIMEOUT
        )
        response.raise_for_status()
        catalog = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Error fetching car models: {str(e)}")
        raise CarCatalogError("Error fetching car models") from e

    cache.set(CATALOG_CACHE_KEY, catalog, timeout=settings.CAR_CATALOG_CACHE_TIMEOUT)
    logger.info("Car catalog refreshed from external provider")
    return catalog
