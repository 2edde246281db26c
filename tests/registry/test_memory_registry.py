from concurrent.futures import ThreadPoolExecutor

import pytest

from shortener.registry.exceptions import ShortCodeCollisionError
from shortener.registry.memory import InMemoryUrlRegistry


class TestInMemoryUrlRegistry:
    def test_create_then_exists(self):
        registry = InMemoryUrlRegistry()
        assert registry.exists_by_long_url("https://example.com") is False

        mapping = registry.create("https://example.com", "Example")

        assert registry.exists_by_long_url("https://example.com") is True
        assert mapping.id == 1
        assert mapping.name == "Example"
        assert len(mapping.short_url) == 7
        assert mapping.created_at == mapping.updated_at
        assert mapping.created_at.tzinfo is None

    def test_ids_increase(self):
        registry = InMemoryUrlRegistry()
        ids = [registry.create(f"https://example.com/{i}").id for i in range(3)]
        assert ids == [1, 2, 3]

    def test_list_all_returns_each_created_mapping(self):
        registry = InMemoryUrlRegistry()
        created = [registry.create(f"https://example.com/{i}") for i in range(4)]

        assert [m.id for m in registry.list_all()] == [m.id for m in created]

    def test_returned_mappings_are_copies(self):
        """Mutating a returned mapping must not change the store"""
        registry = InMemoryUrlRegistry()
        mapping = registry.create("https://example.com")

        mapping.long_url = "https://changed.example.com"
        registry.list_all()[0].short_url = "changed"

        stored = registry.list_all()[0]
        assert stored.long_url == "https://example.com"
        assert stored.short_url != "changed"
        assert registry.exists_by_long_url("https://changed.example.com") is False

    def test_regenerates_code_on_collision(self):
        codes = iter(["AAAAAAA", "AAAAAAA", "BBBBBBB"])
        registry = InMemoryUrlRegistry(code_generator=lambda: next(codes))

        registry.create("https://example.com/1")
        second = registry.create("https://example.com/2")

        assert second.short_url == "BBBBBBB"

    def test_gives_up_after_max_attempts(self):
        registry = InMemoryUrlRegistry(code_generator=lambda: "AAAAAAA", max_attempts=3)
        registry.create("https://example.com/1")

        with pytest.raises(ShortCodeCollisionError) as exc:
            registry.create("https://example.com/2")
        assert exc.value.attempts == 3
        assert len(registry.list_all()) == 1

    def test_concurrent_creates(self):
        registry = InMemoryUrlRegistry()

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(
                lambda i: registry.create(f"https://example.com/{i}"), range(100)
            ))

        assert len({m.id for m in results}) == 100
        assert len(registry.list_all()) == 100
