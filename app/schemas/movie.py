"""
Movie payload schemas and validation entry points

validate_movie         -> full payload, used on create
validate_partial_movie -> every field optional, used on update

Both return Ok(data) or Err(violations); they never raise on bad input.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from app.models.movie import Duration, Genre, MovieFields, Poster, Rate, Title, Year
from app.utils.result import Err, Ok, Result

Violation = Dict[str, Any]

# Friendlier messages for the most common mistakes, keyed by (field, error type)
FIELD_MESSAGES = {
    ("title", "missing"): "Movie title is required",
    ("title", "string_type"): "Movie title must be a String",
    ("poster", "missing"): "Movie poster is required",
    ("poster", "string_type"): "Movie poster must be a URL",
    ("genre", "missing"): "Movie genre is required",
    ("genre", "list_type"): "Movie genre must be a valid genre",
}


class MovieCreate(MovieFields):
    """Schema for creating a movie; rate defaults to 5"""


class MovieUpdate(BaseModel):
    """Schema for partially updating a movie; absent fields stay untouched"""
    title: Optional[Title] = None
    year: Optional[Year] = None
    duration: Optional[Duration] = None
    rate: Optional[Rate] = None
    poster: Optional[Poster] = None
    genre: Optional[List[Genre]] = None

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("*")
    @classmethod
    def reject_null(cls, v):
        # Defaults are not validated, so this only fires for an explicit null
        if v is None:
            raise PydanticCustomError("null_value", "Field may be omitted but not null")
        return v


def format_violations(exc: ValidationError) -> List[Violation]:
    """Flatten pydantic errors into ordered {path, message, code} entries"""
    violations = []
    for error in exc.errors():
        path = list(error["loc"])
        code = error["type"]
        field = path[0] if len(path) == 1 else None
        violations.append({
            "path": path,
            "message": FIELD_MESSAGES.get((field, code), error["msg"]),
            "code": code,
        })
    return violations


def _validate(schema, payload: Any, exclude_unset: bool) -> Result[Dict[str, Any], List[Violation]]:
    try:
        validated = schema.model_validate(payload)
    except ValidationError as e:
        return Err(format_violations(e))
    return Ok(validated.model_dump(exclude_unset=exclude_unset))


def validate_movie(payload: Any) -> Result[Dict[str, Any], List[Violation]]:
    """Validate a complete movie; rate defaults to 5"""
    return _validate(MovieCreate, payload, exclude_unset=False)


def validate_partial_movie(payload: Any) -> Result[Dict[str, Any], List[Violation]]:
    """Validate only the fields present in the payload"""
    return _validate(MovieUpdate, payload, exclude_unset=True)
