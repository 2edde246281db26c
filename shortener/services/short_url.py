"""
Short URL request orchestration.

ShortUrlService sits between the HTTP layer and a UrlRegistry: it
validates input, runs the duplicate check, asks the registry to create
the mapping and turns every lower-layer failure into a ShortUrlError.

The duplicate check and the insert are two separate store calls with no
transaction around them, so two concurrent requests for the same long URL
can both pass the check and both insert.
"""
import logging

from shortener.models.url_mapping import UrlMapping
from shortener.registry.base import UrlRegistry
from shortener.services.exceptions import (
    ShortUrlConflictError,
    ShortUrlError,
    ShortUrlInternalError,
    ShortUrlValidationError,
)

MISSING_LONG_URL = "No long URL provided"
DUPLICATE_DETAILS = "The provided long URL already exists in the database."


class ShortUrlService:
    def __init__(self, registry: UrlRegistry, logger: logging.Logger | None = None):
        self.registry = registry
        self.logger = logger or logging.getLogger("shortener.service")

    def create_short_url(self, long_url: str | None, name: str | None = None) -> UrlMapping:
        """
        Create a mapping for ``long_url`` unless one already exists.

        Raises:
            ShortUrlValidationError: If long_url is missing or blank
            ShortUrlConflictError: If a mapping with this long URL exists
            ShortUrlInternalError: If the registry or code generator fails
        """
        self.logger.debug("create_short_url start")
        self.logger.info(f"Received long URL: {long_url}")

        if not long_url:
            self.logger.error(MISSING_LONG_URL)
            raise ShortUrlValidationError(MISSING_LONG_URL)

        try:
            if self.registry.exists_by_long_url(long_url):
                self.logger.info(f"URL already exists: {long_url}")
                raise ShortUrlConflictError(details=DUPLICATE_DETAILS)

            mapping = self.registry.create(long_url, name)
        except ShortUrlError:
            raise
        except Exception as e:
            self.logger.error(f"Error creating short URL: {e}", exc_info=True)
            raise ShortUrlInternalError(details=str(e)) from e

        self.logger.info(f"Short URL created: {mapping.short_url} -> {mapping.long_url}")
        return mapping

    def list_short_urls(self) -> list[UrlMapping]:
        """
        Return all mappings.

        Raises:
            ShortUrlInternalError: If the registry fails
        """
        self.logger.debug("list_short_urls start")
        try:
            mappings = self.registry.list_all()
        except Exception as e:
            self.logger.error(f"Error fetching URLs: {e}", exc_info=True)
            raise ShortUrlInternalError(details=str(e)) from e

        self.logger.info(f"Fetched {len(mappings)} URLs")
        return mappings
