from fastapi import APIRouter, Body, Depends, Query, Response, status
from typing import Any, List, Optional

from app.models.movie import Movie
from app.services.movie_service import MovieService
from app.store import MovieStore, get_movie_store

router = APIRouter(prefix="/movies", tags=["Movies"])


# ============================================
# Read
# ============================================

@router.get("", response_model=List[Movie])
def list_movies(
    genre: Optional[str] = Query(None, description="Only movies with this genre (case-insensitive)"),
    store: MovieStore = Depends(get_movie_store)
):
    """
    List movies

    - **genre**: optional genre filter, e.g. `drama` matches `Drama`
    """
    return MovieService.list_movies(store, genre)


@router.get(
    "/{movie_id}",
    response_model=Movie,
    responses={404: {"description": "Movie not found"}}
)
def get_movie(movie_id: str, store: MovieStore = Depends(get_movie_store)):
    """Get a movie by ID"""
    return MovieService.get_movie(store, movie_id)


# ============================================
# Write
# ============================================

@router.post(
    "",
    response_model=Movie,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid movie payload"}}
)
def create_movie(
    payload: Any = Body(..., description="Movie fields; rate defaults to 5"),
    store: MovieStore = Depends(get_movie_store)
):
    """
    Add a new movie

    - **title**, **year**, **duration**, **poster**, **genre**: required
    - **rate**: optional, 0-10, defaults to 5

    The id is generated by the server; an id in the body is ignored.
    """
    return MovieService.create_movie(store, payload)


@router.patch(
    "/{movie_id}",
    response_model=Movie,
    responses={
        400: {"description": "Invalid movie payload"},
        404: {"description": "Movie not found"}
    }
)
def update_movie(
    movie_id: str,
    payload: Any = Body(..., description="Any subset of the movie fields"),
    store: MovieStore = Depends(get_movie_store)
):
    """
    Partially update a movie

    Fields present in the body replace the stored ones; the rest are kept.
    """
    return MovieService.update_movie(store, movie_id, payload)


@router.delete("/{movie_id}", responses={404: {"description": "Movie not found"}})
def delete_movie(movie_id: str, store: MovieStore = Depends(get_movie_store)):
    """Delete a movie; there is no way to restore it"""
    MovieService.delete_movie(store, movie_id)
    return {"message": "Movie deleted"}


# ============================================
# CORS pre-flight (headers added by CORSPolicyMiddleware)
# ============================================

@router.options("", include_in_schema=False)
def preflight_collection():
    return Response(status_code=status.HTTP_200_OK)


@router.options("/{movie_id}", include_in_schema=False)
def preflight_movie(movie_id: str):
    return Response(status_code=status.HTTP_200_OK)
