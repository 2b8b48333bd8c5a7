from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from ..config import DEFAULT_APP_CONFIG, AppConfig
from .client import CatalogClient
from .models import Listing, listing_from_record

logger = logging.getLogger(__name__)

_catalog: list[Listing] | None = None


def load_csv(path: Path) -> list[Listing]:
    """Read a catalog CSV into sanitized listings, newest first."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    if "created_at" in df.columns:
        df = df.sort_values("created_at", ascending=False, kind="stable")

    listings: list[Listing] = []
    for record in df.to_dict(orient="records"):
        listing = listing_from_record(record)
        if listing is None:
            logger.warning("Skipping malformed catalog row: %r", record)
            continue
        listings.append(listing)
    return listings


def _load(config: AppConfig) -> list[Listing]:
    if config.catalog_api_url:
        return CatalogClient(config).fetch_listings()
    if not config.catalog_path.is_file():
        logger.warning("Catalog file %s not found, serving an empty catalog", config.catalog_path)
        return []
    return load_csv(config.catalog_path)


def get_catalog(config: AppConfig = DEFAULT_APP_CONFIG) -> list[Listing]:
    """Return the in-memory catalog snapshot, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = _load(config)
        logger.info("Loaded %d listings", len(_catalog))
    return _catalog


def get_listing(listing_id: str, config: AppConfig = DEFAULT_APP_CONFIG) -> Listing | None:
    """
    Look a listing up in the snapshot.

    With a remote catalog, a miss falls back to the products table so
    listings created after the snapshot was loaded are still found.
    """
    global _catalog
    catalog = get_catalog(config)
    for listing in catalog:
        if listing.id == listing_id:
            return listing
    if not config.catalog_api_url:
        return None

    listing = CatalogClient(config).fetch_listing(listing_id)
    if listing is not None:
        _catalog = [listing, *catalog]
    return listing


def get_listings_for_owner(owner_email: str, config: AppConfig = DEFAULT_APP_CONFIG) -> list[Listing]:
    owner = owner_email.strip().lower()
    if config.catalog_api_url:
        return CatalogClient(config).fetch_listings(owner_email=owner)
    return [p for p in get_catalog(config) if p.owner_email == owner]


def add_listing(listing: Listing, config: AppConfig = DEFAULT_APP_CONFIG) -> bool:
    """Put a new listing at the front of the snapshot (and the remote table)."""
    global _catalog
    if config.catalog_api_url and not CatalogClient(config).insert_listing(listing):
        return False
    _catalog = [listing, *get_catalog(config)]
    return True


def remove_listing(listing_id: str, config: AppConfig = DEFAULT_APP_CONFIG) -> bool:
    global _catalog
    if config.catalog_api_url and not CatalogClient(config).delete_listing(listing_id):
        return False
    _catalog = [p for p in get_catalog(config) if p.id != listing_id]
    return True


def record_view(listing_id: str, config: AppConfig = DEFAULT_APP_CONFIG) -> Listing | None:
    """
    Bump the view counter of a listing in the snapshot.

    With a remote catalog the new count is also written back to the
    products table. That write is best-effort; the snapshot keeps the
    bumped count either way.
    """
    global _catalog
    catalog = get_catalog(config)
    updated: Listing | None = None
    snapshot: list[Listing] = []
    for listing in catalog:
        if listing.id == listing_id:
            listing = listing.model_copy(update={"view_count": listing.view_count + 1})
            updated = listing
        snapshot.append(listing)
    # Swap in a new list so earlier snapshots handed out stay unchanged.
    _catalog = snapshot

    if updated is not None and config.catalog_api_url:
        CatalogClient(config).update_view_count(updated.id, updated.view_count)
    return updated


def set_catalog(listings: list[Listing]) -> None:
    global _catalog
    _catalog = list(listings)


def reset_catalog() -> None:
    """Drop the snapshot; the next access reloads it from the source."""
    global _catalog
    _catalog = None
