import httpx
import pytest
from fastapi.testclient import TestClient

from app import app
from scraper import get_http_client

SITE = "https://ogomovies.com.pk"

PLAYER_PAGE = (
    '<html><head><meta property="og:image" content="https://img.example/foo.jpg" /></head><body>'
    '<iframe class="metaframe rptss" src="https://player.example/embed/1" frameborder="0"></iframe>'
    "</body></html>"
)


def upstream(request):
    if request.url.path == "/wp-json/wp/v2/search":
        return httpx.Response(200, json=[{"title": "Foo", "url": f"{SITE}/movies/foo-2024/"}])
    if request.url.path == "/wp-json/wp/v2/movies":
        return httpx.Response(200, json=[{"content": {"rendered": "<p>A hero rises.</p>"}, "title": {"rendered": "Foo"}}])
    if request.url.path == "/movies/foo-2024/":
        return httpx.Response(200, text=PLAYER_PAGE)
    return httpx.Response(404)


@pytest.fixture
def client():
    async def override_http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as http_client:
            yield http_client

    app.dependency_overrides[get_http_client] = override_http_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_root_lists_endpoints(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "search" in response.json()["endpoints"]


def test_search_endpoint(client):
    response = client.get("/search", params={"keyword": "foo", "mode": "api"})

    assert response.status_code == 200
    assert response.json() == [{"title": "Foo", "image": "https://img.example/foo.jpg", "href": f"{SITE}/movies/foo-2024/"}]


def test_details_endpoint(client):
    response = client.get("/details", params={"url": f"{SITE}/movies/foo-2024/", "mode": "api"})

    assert response.status_code == 200
    assert response.json() == [{"description": "A hero rises.", "aliases": "Foo", "airdate": "2024"}]


def test_episodes_endpoint(client):
    response = client.get("/episodes", params={"url": f"{SITE}/movies/foo-2024/", "mode": "api"})

    assert response.json() == [{"href": f"{SITE}/movies/foo-2024/", "number": "1"}]


def test_stream_endpoint(client):
    response = client.get("/stream", params={"url": f"{SITE}/movies/foo-2024/", "mode": "site"})

    assert response.json() == {"url": "https://player.example/embed/1"}


def test_stream_endpoint_missing_page(client):
    response = client.get("/stream", params={"url": f"{SITE}/movies/missing/", "mode": "api"})

    assert response.status_code == 200
    assert response.json() == {"url": None}


def test_invalid_mode_is_rejected(client):
    response = client.get("/search", params={"keyword": "foo", "mode": "html"})

    assert response.status_code == 400


def test_html_endpoint_extracts_from_body(client):
    html = '<head><link rel="canonical" href="https://site/movies/foo-2024/" /></head>'

    response = client.post("/html/episodes", content=html, headers={"Content-Type": "text/html"})

    assert response.status_code == 200
    assert response.json() == [{"href": "https://site/movies/foo-2024/", "number": "1"}]


def test_html_endpoint_stream_without_iframe(client):
    response = client.post("/html/stream", content="<div>No player</div>")

    assert response.json() == {"url": None}


def test_html_endpoint_unknown_operation(client):
    response = client.post("/html/download", content="<html></html>")

    assert response.status_code == 400
