"""
Record models held by the in-memory store
"""
from app.models.movie import Genre, Movie

__all__ = [
    "Genre",
    "Movie"
]
