"""In-memory video catalog with atomic refresh."""

import time
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

import httpx
from pydantic import ValidationError

from xsen_mcp.models.catalog import Catalog, CatalogEntry
from xsen_mcp.models.errors import CatalogError, FetchError, ParseError
from xsen_mcp.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_FETCH_TIMEOUT = 10.0


def parse_catalog(document: Any, source_url: str = "") -> tuple[CatalogEntry, ...]:
    """
    Validates a decoded videos.json document.

    Raises:
        ParseError: If the document is not a list of objects, or any entry is invalid.
    """
    if not isinstance(document, list):
        raise ParseError(
            f"Catalog document must be a JSON array, got {type(document).__name__}", source_url
        )

    entries: list[CatalogEntry] = []
    for index, item in enumerate(document):
        if not isinstance(item, dict):
            raise ParseError(
                f"Catalog entry {index} must be an object, got {type(item).__name__}", source_url
            )
        try:
            entries.append(CatalogEntry.model_validate(item))
        except ValidationError as e:
            raise ParseError(f"Catalog entry {index} is invalid: {e}", source_url) from e
    return tuple(entries)


class CatalogStore:
    """
    Holds the current catalog snapshot and reloads it from the remote source.

    The published snapshot is only ever replaced by a single reference assignment,
    so readers calling `snapshot()` always see a complete catalog.
    """

    def __init__(
        self,
        source_url: str,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.source_url = source_url
        self.timeout = timeout
        self._transport = transport
        self._catalog = Catalog()

    def snapshot(self) -> Catalog:
        """Returns the current catalog. Callers must not mutate it."""
        return self._catalog

    def replace(self, entries: Iterable[CatalogEntry]) -> Catalog:
        """Publishes a new catalog built from `entries`."""
        catalog = Catalog(
            entries=tuple(entries),
            loaded_at=datetime.now(UTC),
            version=self._catalog.version + 1,
        )
        self._catalog = catalog
        return catalog

    async def fetch(self) -> tuple[CatalogEntry, ...]:
        """
        Downloads and parses the catalog document without publishing it.

        Raises:
            FetchError: On network failures, malformed source URLs and non-2xx responses.
            ParseError: If the body is not valid JSON or not a valid catalog.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.source_url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"HTTP {e.response.status_code}", self.source_url) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"{type(e).__name__}: {e}", self.source_url) from e

        try:
            document = response.json()
        except ValueError as e:
            raise ParseError(f"Catalog document is not valid JSON: {e}", self.source_url) from e

        return parse_catalog(document, self.source_url)

    async def load(self) -> bool:
        """
        Fetches the remote catalog and publishes it.

        Failures are logged and the previous catalog stays in place.

        Returns:
            True if a new catalog was published.
        """
        start_time = time.monotonic()
        logger.info("catalog_load_started", source_url=self.source_url)
        try:
            entries = await self.fetch()
        except CatalogError as e:
            previous = self._catalog
            logger.error(
                "catalog_load_failed",
                source_url=e.source_url,
                error_type=type(e).__name__,
                error=e.message,
                retained_videos=len(previous),
                retained_version=previous.version,
            )
            return False

        catalog = self.replace(entries)
        logger.info(
            "catalog_loaded",
            videos=len(catalog),
            version=catalog.version,
            duration_ms=round((time.monotonic() - start_time) * 1000, 2),
        )
        return True
