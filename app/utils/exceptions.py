"""
Domain errors raised by the store and service layers
Translated to HTTP responses by the handlers in app.main
"""
from typing import Any, Dict, List


class MovieNotFoundError(Exception):
    """No movie with the requested id"""

    def __init__(self, movie_id: str):
        self.movie_id = movie_id
        super().__init__(f"Movie not found: {movie_id}")


class MovieValidationError(Exception):
    """Payload failed schema validation"""

    def __init__(self, violations: List[Dict[str, Any]]):
        self.violations = violations
        super().__init__(f"{len(violations)} validation error(s)")
