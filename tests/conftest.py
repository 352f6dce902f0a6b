import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.movie import Movie
from app.store import MovieStore, get_movie_store

SEED_MOVIES = [
    {
        "id": "dcdd0fad-a94c-4810-8acc-5f108d3b18c3",
        "title": "The Shawshank Redemption",
        "year": 1994,
        "duration": 142,
        "poster": "https://example.com/shawshank.jpg",
        "genre": ["Drama"],
        "rate": 9.3,
    },
    {
        "id": "c8a7d63f-3b04-44d3-9d95-8782fd7dcfaf",
        "title": "The Dark Knight",
        "year": 2008,
        "duration": 152,
        "poster": "https://example.com/dark-knight.jpg",
        "genre": ["Action", "Crime", "Drama"],
        "rate": 9.0,
    },
    {
        "id": "c906673b-3948-4402-ac7f-73ac3a9e3105",
        "title": "The Matrix",
        "year": 1999,
        "duration": 136,
        "poster": "https://example.com/matrix.jpg",
        "genre": ["Action", "Sci-Fi"],
        "rate": 8.7,
    },
]


@pytest.fixture
def movie_store():
    """Provide a fresh store with a small known dataset for each test."""
    return MovieStore(Movie.model_validate(movie) for movie in SEED_MOVIES)


@pytest.fixture
def client(movie_store):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_movie_store] = lambda: movie_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_movie_store, None)


@pytest.fixture
def valid_payload():
    return {
        "title": "Foo",
        "year": 2020,
        "duration": 90,
        "poster": "http://x.com/p.jpg",
        "genre": ["Drama"],
    }
