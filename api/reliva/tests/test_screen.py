import pytest

from reliva.core.config import settings
from reliva.normalizers.media import normalize_movie, normalize_series
from reliva.schema.screen import POSTER_PLACEHOLDER

TMDB = "https://api.themoviedb.org/3"


def test_movie_and_series_normalization():
    movie = normalize_movie({"id": 550, "title": "Fight Club", "release_date": "1999-10-15", "poster_path": "/p.jpg"})
    assert movie.id == 550
    assert movie.year == 1999
    assert movie.cover == "https://image.tmdb.org/t/p/w300/p.jpg"

    series = normalize_series({"id": 1396, "name": "Breaking Bad"}).to_wire()
    assert series["title"] == "Breaking Bad"
    assert series["cover"] == POSTER_PLACEHOLDER
    assert series["numberOfSeasons"] == 1
    assert series["numberOfEpisodes"] == 1


def test_screen_titles_drop_non_finite_numbers():
    movie = normalize_movie({"id": 1, "title": "X", "vote_count": float("nan"), "vote_average": float("inf")})
    assert movie.vote_count == 0
    assert movie.rating == 0

    series = normalize_series({"id": 2, "name": "Y", "number_of_seasons": float("inf")})
    assert series.number_of_seasons == 1


@pytest.mark.asyncio
async def test_status_reports_missing_key_without_raising(client, upstream):
    response = await client.get("/api/tmdb/status")

    assert response.status_code == 200
    body = response.json()
    assert body["configured"] is False
    assert body["status"] == "error"
    assert upstream.calls == []


@pytest.mark.asyncio
async def test_search_without_key_is_not_masked_by_mocks(client, upstream):
    response = await client.get("/api/tmdb/search", params={"q": "fight"})

    assert response.status_code == 500
    assert "TMDB API key not configured" in response.json()["error"]


@pytest.mark.asyncio
async def test_search_falls_back_to_canned_results(client, upstream, monkeypatch):
    monkeypatch.setattr(settings, "tmdb_api_key", "tmdb-key")
    upstream.add(f"{TMDB}/search/movie", status=503)

    response = await client.get("/api/tmdb/search", params={"q": "fight"})

    assert response.status_code == 200
    body = response.json()
    assert body["fallback"] is True
    assert [movie["title"] for movie in body["results"]] == ["Fight Club", "Forrest Gump"]


@pytest.mark.asyncio
async def test_proxy_appends_key_and_relays_upstream_status(client, upstream, monkeypatch):
    monkeypatch.setattr(settings, "tmdb_api_key", "tmdb-key")
    upstream.add(f"{TMDB}/movie/550", {"id": 550, "title": "Fight Club"}, params={"api_key": "tmdb-key"})
    upstream.add(f"{TMDB}/movie/0", status=404)

    response = await client.get("/api/tmdb/proxy/movie/550", params={"language": "en-US"})
    assert response.status_code == 200
    assert response.json() == {"id": 550, "title": "Fight Club"}
    assert "s-maxage=300" in response.headers["cache-control"]
    assert upstream.calls[0].params == {"language": "en-US", "api_key": "tmdb-key"}

    response = await client.get("/api/tmdb/proxy/movie/0")
    assert response.status_code == 404
    assert response.json() == {"error": "TMDB API error: 404"}


@pytest.mark.asyncio
async def test_details_validates_type_and_maps_missing_content(client, upstream, monkeypatch):
    monkeypatch.setattr(settings, "tmdb_api_key", "tmdb-key")
    upstream.add(f"{TMDB}/movie/999", status=404)

    response = await client.get("/api/tmdb/details", params={"id": "1", "type": "book"})
    assert response.status_code == 400

    response = await client.get("/api/tmdb/details", params={"id": "999"})
    assert response.status_code == 404
    assert response.json() == {"error": "Content not found"}
