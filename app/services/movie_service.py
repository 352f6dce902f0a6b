from typing import Any, List, Optional
from uuid import uuid4
import logging

from app.models.movie import Movie
from app.schemas.movie import validate_movie, validate_partial_movie
from app.store import MovieStore
from app.utils.exceptions import MovieValidationError
from app.utils.result import Err

logger = logging.getLogger(__name__)


class MovieService:
    """Service for movie CRUD operations"""

    @staticmethod
    def list_movies(store: MovieStore, genre: Optional[str] = None) -> List[Movie]:
        """All movies, or only those carrying ``genre`` when it is given"""
        if genre:
            movies = store.list_by_genre(genre)
            logger.info(f"Genre filter '{genre}' matched {len(movies)} movies")
            return movies
        return store.list_movies()

    @staticmethod
    def get_movie(store: MovieStore, movie_id: str) -> Movie:
        return store.find_by_id(movie_id)

    @staticmethod
    def create_movie(store: MovieStore, payload: Any) -> Movie:
        """
        Validate a full payload and store it under a freshly minted id.

        Raises:
            MovieValidationError: payload does not describe a complete movie
        """
        result = validate_movie(payload)
        if isinstance(result, Err):
            logger.warning(f"Rejected movie creation: {len(result.error)} violation(s)")
            raise MovieValidationError(result.error)

        movie = store.create(Movie(id=str(uuid4()), **result.value))
        logger.info(f"A new movie has been added: ID {movie.id}, {movie.title}")
        return movie

    @staticmethod
    def update_movie(store: MovieStore, movie_id: str, payload: Any) -> Movie:
        """
        Validate a partial payload and merge it onto an existing movie.

        Validation happens before the lookup, so an invalid body is reported
        even when the id does not exist.

        Raises:
            MovieValidationError: a present field breaks its rule
            MovieNotFoundError: no movie with ``movie_id``
        """
        result = validate_partial_movie(payload)
        if isinstance(result, Err):
            logger.warning(f"Rejected update of movie {movie_id}: {len(result.error)} violation(s)")
            raise MovieValidationError(result.error)

        movie = store.update(movie_id, result.value)
        logger.info(f"Updated movie ID {movie_id}: {movie.title}")
        return movie

    @staticmethod
    def delete_movie(store: MovieStore, movie_id: str) -> None:
        store.delete(movie_id)
        logger.info(f"Deleted movie ID {movie_id}")
