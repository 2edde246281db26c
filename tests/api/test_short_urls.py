"""
Tests for the short URL endpoints.

Covers creation, duplicate rejection, validation errors, listing and the
error payloads returned when the store fails.
"""
from shortener.dependencies.registry import get_registry
from shortener.main import app
from shortener.registry.base import UrlRegistry
from shortener.registry.exceptions import StoreUnavailableError
from shortener.utils.codes import DEFAULT_CHARSET
from tests.constants import URLs


class BrokenRegistry(UrlRegistry):
    def exists_by_long_url(self, long_url):
        raise StoreUnavailableError("exists_by_long_url", "could not connect to server")

    def create(self, long_url, name=None):
        raise StoreUnavailableError("create", "could not connect to server")

    def list_all(self):
        raise StoreUnavailableError("list_all", "could not connect to server")


def _use_broken_registry():
    app.dependency_overrides[get_registry] = lambda: BrokenRegistry()


# Create tests


def test_create_short_url_success(client):
    response = client.post(URLs.SHORT_URL, json={"longUrl": "https://example.com"})

    assert response.status_code == 200
    data = response.json()
    assert data["longUrl"] == "https://example.com"
    assert len(data["shortUrl"]) == 7
    assert all(c in DEFAULT_CHARSET for c in data["shortUrl"])
    assert data["name"] is None
    assert isinstance(data["id"], int)
    assert "createdAt" in data
    assert "updatedAt" in data


def test_create_short_url_with_name(client):
    response = client.post(
        URLs.SHORT_URL,
        json={"longUrl": "https://example.com/docs", "name": "Docs"},
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Docs"


def test_create_short_url_duplicate(client):
    client.post(URLs.SHORT_URL, json={"longUrl": "https://example.com"})

    response = client.post(URLs.SHORT_URL, json={"longUrl": "https://example.com"})

    assert response.status_code == 409
    data = response.json()
    assert data["error"] == "URL already exists"
    assert data["details"] == "The provided long URL already exists in the database."


def test_create_short_url_duplicate_is_case_sensitive(client):
    client.post(URLs.SHORT_URL, json={"longUrl": "https://example.com/Page"})

    response = client.post(URLs.SHORT_URL, json={"longUrl": "https://example.com/page"})

    assert response.status_code == 200


def test_create_short_url_missing_long_url(client):
    response = client.post(URLs.SHORT_URL, json={})

    assert response.status_code == 400
    assert response.json() == {"error": "No long URL provided"}


def test_create_short_url_empty_long_url(client):
    response = client.post(URLs.SHORT_URL, json={"longUrl": "", "name": "Empty"})

    assert response.status_code == 400
    assert response.json() == {"error": "No long URL provided"}


def test_create_short_url_without_body(client):
    response = client.post(URLs.SHORT_URL)

    assert response.status_code == 400
    assert response.json() == {"error": "No long URL provided"}


def test_create_short_url_invalid_json(client):
    response = client.post(
        URLs.SHORT_URL,
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"


def test_create_short_url_wrong_type(client):
    response = client.post(URLs.SHORT_URL, json={"longUrl": 12345})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Invalid request body"
    assert "longUrl" in data["details"]


def test_create_short_url_store_unavailable(client):
    _use_broken_registry()

    response = client.post(URLs.SHORT_URL, json={"longUrl": "https://example.com"})

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Internal server error"
    assert "could not connect to server" in data["details"]
    assert "Traceback" not in data["details"]


# List tests


def test_list_short_urls_empty(client):
    response = client.get(URLs.SHORT_URL)

    assert response.status_code == 200
    assert response.json() == []


def test_list_short_urls_contains_created(client):
    created = client.post(URLs.SHORT_URL, json={"longUrl": "https://example.com"}).json()

    response = client.get(URLs.SHORT_URL)

    assert response.status_code == 200
    data = response.json()
    assert len(data) >= 1
    assert created in data


def test_list_short_urls_returns_all_in_order(client):
    ids = [
        client.post(URLs.SHORT_URL, json={"longUrl": f"https://example.com/{i}"}).json()["id"]
        for i in range(3)
    ]

    data = client.get(URLs.SHORT_URL).json()

    assert [item["id"] for item in data] == ids


def test_list_short_urls_store_unavailable(client):
    _use_broken_registry()

    response = client.get(URLs.SHORT_URL)

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"


# Misc


def test_root_liveness(client):
    response = client.get(URLs.ROOT)

    assert response.status_code == 200
    assert response.json() == "Hello World!"


def test_cors_headers(client):
    response = client.get(URLs.SHORT_URL, headers={"Origin": "https://app.example.com"})

    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers


def test_create_short_url_snake_case_key_not_accepted(client):
    response = client.post(URLs.SHORT_URL, json={"long_url": "https://example.com"})

    assert response.status_code == 400
    assert response.json() == {"error": "No long URL provided"}
    assert client.get(URLs.SHORT_URL).json() == []
