"""
In-memory movie store

Holds the ordered movie collection for the lifetime of the process.
Endpoints run on a thread pool, so every read and every
lookup-then-mutate sequence happens under one lock.
"""
import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from fastapi import Request

from app.models.movie import Movie
from app.utils.exceptions import MovieNotFoundError

logger = logging.getLogger(__name__)


class MovieStore:
    """Ordered collection of movies keyed by id"""

    def __init__(self, movies: Optional[Iterable[Movie]] = None):
        self._movies: List[Movie] = []
        self._lock = threading.Lock()
        for movie in movies or []:
            self.create(movie)

    def __len__(self) -> int:
        with self._lock:
            return len(self._movies)

    def _index_of(self, movie_id: str) -> int:
        """Position of a movie in the collection; caller must hold the lock"""
        for index, movie in enumerate(self._movies):
            if movie.id == movie_id:
                return index
        raise MovieNotFoundError(movie_id)

    @staticmethod
    def _checked(movie: Movie) -> Movie:
        """Fresh copy validated against the full record rules"""
        return Movie.model_validate(movie.model_dump())

    def list_movies(self) -> List[Movie]:
        with self._lock:
            return [movie.model_copy(deep=True) for movie in self._movies]

    def list_by_genre(self, genre: str) -> List[Movie]:
        """Movies carrying the genre, compared case-insensitively"""
        with self._lock:
            return [
                movie.model_copy(deep=True)
                for movie in self._movies
                if movie.has_genre(genre)
            ]

    def find_by_id(self, movie_id: str) -> Movie:
        with self._lock:
            return self._movies[self._index_of(movie_id)].model_copy(deep=True)

    def create(self, movie: Movie) -> Movie:
        stored = self._checked(movie)
        with self._lock:
            if any(existing.id == stored.id for existing in self._movies):
                raise ValueError(f"Duplicate movie id: {stored.id}")
            self._movies.append(stored)
            return stored.model_copy(deep=True)

    def replace(self, movie_id: str, movie: Movie) -> Movie:
        """Swap the record at the same position; the id cannot change"""
        if movie.id != movie_id:
            raise ValueError(f"Cannot change movie id {movie_id} to {movie.id}")
        stored = self._checked(movie)
        with self._lock:
            index = self._index_of(movie_id)
            self._movies[index] = stored
            return stored.model_copy(deep=True)

    def update(self, movie_id: str, changes: Dict[str, Any]) -> Movie:
        """
        Merge validated changes onto an existing movie.

        Fields absent from ``changes`` keep their stored value. The merged
        record is validated again as a complete Movie before it replaces
        the old one, so the stored collection never holds a partial record.
        """
        changes = {key: value for key, value in changes.items() if key != "id"}
        with self._lock:
            index = self._index_of(movie_id)
            merged = Movie.model_validate({**self._movies[index].model_dump(), **changes})
            self._movies[index] = merged
            return merged.model_copy(deep=True)

    def delete(self, movie_id: str) -> None:
        with self._lock:
            index = self._index_of(movie_id)
            del self._movies[index]


def load_seed_movies(path: Path) -> List[Movie]:
    """Read the seed dataset; every entry must be a complete movie"""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    movies = [Movie.model_validate(item) for item in raw]
    logger.info(f"Loaded {len(movies)} seed movies from {path}")
    return movies


# Dependency for FastAPI routes
def get_movie_store(request: Request) -> MovieStore:
    """
    Movie store dependency for FastAPI.
    The store is created in the application lifespan and kept on app.state.

    Usage:
        @router.get("/endpoint")
        def endpoint(store: MovieStore = Depends(get_movie_store)):
            # Use store here
    """
    return request.app.state.movie_store
