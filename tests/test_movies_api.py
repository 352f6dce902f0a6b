from fastapi.testclient import TestClient

from app.main import app
from app.store import get_movie_store

SHAWSHANK_ID = "dcdd0fad-a94c-4810-8acc-5f108d3b18c3"


def test_list_movies_returns_all(client):
    response = client.get("/movies")

    assert response.status_code == 200
    assert len(response.json()) == 3


def test_list_movies_filters_by_genre_case_insensitively(client):
    response = client.get("/movies", params={"genre": "drama"})

    assert response.status_code == 200
    titles = [movie["title"] for movie in response.json()]
    assert titles == ["The Shawshank Redemption", "The Dark Knight"]


def test_empty_genre_means_no_filter(client):
    response = client.get("/movies?genre=")

    assert response.status_code == 200
    assert len(response.json()) == 3


def test_get_movie_by_id(client):
    response = client.get(f"/movies/{SHAWSHANK_ID}")

    assert response.status_code == 200
    assert response.json()["title"] == "The Shawshank Redemption"


def test_get_unknown_movie_returns_404(client):
    response = client.get("/movies/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"message": "Movie not found"}


def test_create_movie_returns_201_with_id_and_default_rate(client, movie_store, valid_payload):
    response = client.post("/movies", json=valid_payload)

    assert response.status_code == 201
    body = response.json()
    assert body["rate"] == 5
    assert isinstance(body["rate"], int)
    assert body["id"]
    assert body["title"] == "Foo"
    assert len(movie_store) == 4


def test_created_movie_can_be_fetched(client, valid_payload):
    created = client.post("/movies", json=valid_payload).json()

    fetched = client.get(f"/movies/{created['id']}")

    assert fetched.status_code == 200
    assert fetched.json() == {**valid_payload, "id": created["id"], "rate": 5}


def test_create_ignores_client_supplied_id(client, valid_payload):
    valid_payload["id"] = SHAWSHANK_ID

    response = client.post("/movies", json=valid_payload)

    assert response.status_code == 201
    assert response.json()["id"] != SHAWSHANK_ID


def test_create_invalid_returns_400_and_stores_nothing(client, movie_store, valid_payload):
    del valid_payload["title"]
    valid_payload["year"] = 1800

    response = client.post("/movies", json=valid_payload)

    assert response.status_code == 400
    violations = response.json()["error"]
    assert [v["path"] for v in violations] == [["title"], ["year"]]
    assert violations[0]["message"] == "Movie title is required"
    assert len(movie_store) == 3


def test_create_with_malformed_json_returns_400(client, movie_store):
    response = client.post(
        "/movies",
        content="{not json",
        headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["error"]
    assert len(movie_store) == 3


def test_patch_merges_fields_and_keeps_rate(client):
    response = client.patch(f"/movies/{SHAWSHANK_ID}", json={"year": 1995})

    assert response.status_code == 200
    body = response.json()
    assert body["year"] == 1995
    assert body["rate"] == 9.3
    assert body["id"] == SHAWSHANK_ID
    assert client.get(f"/movies/{SHAWSHANK_ID}").json()["year"] == 1995


def test_patch_invalid_returns_400_and_leaves_movie_untouched(client):
    response = client.patch(f"/movies/{SHAWSHANK_ID}", json={"year": 1995, "rate": 42})

    assert response.status_code == 400
    assert [v["path"] for v in response.json()["error"]] == [["rate"]]
    assert client.get(f"/movies/{SHAWSHANK_ID}").json()["year"] == 1994


def test_patch_unknown_movie_returns_404(client):
    response = client.patch("/movies/does-not-exist", json={"year": 2000})

    assert response.status_code == 404
    assert response.json() == {"message": "Movie not found"}


def test_patch_cannot_change_id(client):
    response = client.patch(f"/movies/{SHAWSHANK_ID}", json={"id": "other"})

    assert response.status_code == 200
    assert response.json()["id"] == SHAWSHANK_ID


def test_delete_movie(client, movie_store):
    response = client.delete(f"/movies/{SHAWSHANK_ID}")

    assert response.status_code == 200
    assert response.json() == {"message": "Movie deleted"}
    assert len(movie_store) == 2
    assert client.get(f"/movies/{SHAWSHANK_ID}").status_code == 404


def test_delete_unknown_movie_returns_404(client, movie_store):
    response = client.delete("/movies/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"message": "Movie not found"}
    assert len(movie_store) == 3


def test_unknown_route_uses_message_body(client):
    response = client.get("/series")

    assert response.status_code == 404
    assert "message" in response.json()


def test_health_reports_store_size(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["movies"] == 3


def test_unhandled_error_returns_500_and_server_keeps_serving(movie_store):
    class BrokenStore:
        def list_movies(self):
            raise RuntimeError("boom")

    app.dependency_overrides[get_movie_store] = lambda: BrokenStore()
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/movies", headers={"Origin": "http://example.com"})
            assert response.status_code == 500
            assert response.json() == {"message": "Internal server error"}
            assert response.headers["access-control-allow-origin"] == "http://example.com"

            app.dependency_overrides[get_movie_store] = lambda: movie_store
            assert client.get("/movies").status_code == 200
    finally:
        app.dependency_overrides.pop(get_movie_store, None)
