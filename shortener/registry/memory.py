"""
In-memory URL registry.

Keeps mappings in process memory. Useful as a fake store in tests and for
running the service without a database.
"""
import threading
from datetime import datetime, timezone

from shortener.models.url_mapping import UrlMapping
from shortener.registry.base import CodeGenerator, UrlRegistry
from shortener.registry.exceptions import ShortCodeCollisionError


def _copy(mapping: UrlMapping) -> UrlMapping:
    return UrlMapping(
        id=mapping.id,
        name=mapping.name,
        long_url=mapping.long_url,
        short_url=mapping.short_url,
        created_at=mapping.created_at,
        updated_at=mapping.updated_at,
    )


class InMemoryUrlRegistry(UrlRegistry):
    """Thread-safe registry backed by a list and a short code index."""

    def __init__(
        self,
        code_generator: CodeGenerator | None = None,
        max_attempts: int = 3,
    ):
        super().__init__(code_generator=code_generator, max_attempts=max_attempts)
        self._mappings: list[UrlMapping] = []
        self._short_urls: set[str] = set()
        self._next_id = 1
        self._lock = threading.Lock()

    def exists_by_long_url(self, long_url: str) -> bool:
        with self._lock:
            return any(m.long_url == long_url for m in self._mappings)

    def create(self, long_url: str, name: str | None = None) -> UrlMapping:
        with self._lock:
            for _ in range(self.max_attempts):
                short_url = self.code_generator()
                if short_url in self._short_urls:
                    continue

                # Naive UTC, the same shape the SQL registry reads back from func.now()
                now = datetime.now(timezone.utc).replace(tzinfo=None)
                mapping = UrlMapping(
                    id=self._next_id,
                    name=name,
                    long_url=long_url,
                    short_url=short_url,
                    created_at=now,
                    updated_at=now,
                )
                self._next_id += 1
                self._mappings.append(mapping)
                self._short_urls.add(short_url)
                return _copy(mapping)

        raise ShortCodeCollisionError(self.max_attempts)

    def list_all(self) -> list[UrlMapping]:
        with self._lock:
            return [_copy(m) for m in self._mappings]
