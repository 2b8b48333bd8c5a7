from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import DEFAULT_APP_CONFIG, AppConfig
from .models import Listing, listing_from_record

logger = logging.getLogger(__name__)

LISTING_COLUMNS = [
    "id",
    "title",
    "daily_price",
    "description",
    "tags",
    "features",
    "created_at",
    "owner_email",
    "view_count",
]


class CatalogClient:
    """Client for the hosted ``products`` table (PostgREST API)."""

    def __init__(
        self,
        config: AppConfig = DEFAULT_APP_CONFIG,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = config.catalog_api_url.rstrip("/")
        self.api_key = config.catalog_api_key
        self.timeout = config.catalog_timeout
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _get_rows(self, params: dict[str, str]) -> list[dict[str, Any]]:
        with httpx.Client(
            base_url=self.base_url,
            headers=self._headers(),
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            response = client.get("/rest/v1/products", params=params)
            response.raise_for_status()
            payload = response.json()
        return payload if isinstance(payload, list) else []

    @staticmethod
    def _to_listings(rows: list[dict[str, Any]]) -> list[Listing]:
        listings: list[Listing] = []
        for row in rows:
            listing = listing_from_record(row) if isinstance(row, dict) else None
            if listing is None:
                logger.warning("Skipping malformed catalog row: %r", row)
                continue
            listings.append(listing)
        return listings

    def fetch_listings(self, owner_email: str | None = None) -> list[Listing]:
        """
        Fetch every listing, newest first.

        Returns an empty list on any failure (network error, bad status,
        bad JSON) so callers simply see an empty catalog.
        """
        if not self.base_url:
            return []

        params = {"select": ",".join(LISTING_COLUMNS), "order": "created_at.desc"}
        if owner_email:
            params["owner_email"] = f"eq.{owner_email.strip().lower()}"

        try:
            rows = self._get_rows(params)
        except (httpx.HTTPError, ValueError):
            logger.warning("Catalog fetch failed, serving an empty catalog", exc_info=True)
            return []
        return self._to_listings(rows)

    def fetch_listing(self, listing_id: str) -> Listing | None:
        if not self.base_url or not listing_id:
            return None

        params = {"select": ",".join(LISTING_COLUMNS), "id": f"eq.{listing_id}", "limit": "1"}
        try:
            rows = self._get_rows(params)
        except (httpx.HTTPError, ValueError):
            logger.warning("Catalog lookup for %s failed", listing_id, exc_info=True)
            return None
        listings = self._to_listings(rows)
        return listings[0] if listings else None

    # ── Writes ───────────────────────────────────────────────────────────

    def _send(
        self,
        method: str,
        params: dict[str, str] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> None:
        headers = {**self._headers(), "Prefer": "return=minimal"}
        with httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            response = client.request(method, "/rest/v1/products", params=params, json=payload)
            response.raise_for_status()

    def insert_listing(self, listing: Listing) -> bool:
        if not self.base_url:
            return False
        payload = listing.model_dump(include=set(LISTING_COLUMNS))
        try:
            self._send("POST", payload=payload)
        except httpx.HTTPError:
            logger.warning("Catalog insert for %s failed", listing.id, exc_info=True)
            return False
        return True

    def delete_listing(self, listing_id: str) -> bool:
        if not self.base_url or not listing_id:
            return False
        try:
            self._send("DELETE", params={"id": f"eq.{listing_id}"})
        except httpx.HTTPError:
            logger.warning("Catalog delete for %s failed", listing_id, exc_info=True)
            return False
        return True

    def update_view_count(self, listing_id: str, view_count: int) -> bool:
        """Write a view counter back; failures are logged and ignored."""
        if not self.base_url or not listing_id:
            return False
        try:
            self._send("PATCH", params={"id": f"eq.{listing_id}"}, payload={"view_count": view_count})
        except httpx.HTTPError:
            logger.warning("View count update for %s failed", listing_id, exc_info=True)
            return False
        return True
