"""
Abstract base class for URL registries.

This module defines the interface that every registry must implement.
A registry owns persistence of UrlMapping records: it can look records up
by long URL, create new ones and list all of them.
"""
from abc import ABC, abstractmethod
from collections.abc import Callable

from shortener.models.url_mapping import UrlMapping
from shortener.utils.codes import generate_short_code

CodeGenerator = Callable[[], str]


class UrlRegistry(ABC):
    """
    Abstract base class for URL registries.

    Implementations receive a zero-argument ``code_generator`` that returns
    a fresh short code on every call, plus ``max_attempts``: how many codes
    ``create`` may try before giving up when codes collide with stored ones.
    """

    def __init__(
        self,
        code_generator: CodeGenerator | None = None,
        max_attempts: int = 3,
    ):
        self.code_generator = code_generator or generate_short_code
        self.max_attempts = max(max_attempts, 1)

    @abstractmethod
    def exists_by_long_url(self, long_url: str) -> bool:
        """
        Check whether any mapping has exactly this long URL.

        Matching is plain, case-sensitive string equality: no scheme,
        trailing slash or query normalization.

        Args:
            long_url: The long URL to look up

        Returns:
            True if at least one mapping matches

        Raises:
            StoreUnavailableError: If the store cannot be queried
        """
        pass

    @abstractmethod
    def create(self, long_url: str, name: str | None = None) -> UrlMapping:
        """
        Generate a short code and persist a new mapping.

        Does not check for an existing mapping with the same long URL;
        callers do that with exists_by_long_url() first.

        Args:
            long_url: The original URL
            name: Optional human readable label

        Returns:
            The persisted mapping, including its store-assigned id

        Raises:
            StoreUnavailableError: If the store cannot be written
            ShortCodeCollisionError: If every attempted code already exists
        """
        pass

    @abstractmethod
    def list_all(self) -> list[UrlMapping]:
        """
        Return every stored mapping ordered by id (insertion order).

        Raises:
            StoreUnavailableError: If the store cannot be queried
        """
        pass
