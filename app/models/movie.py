from enum import Enum
from typing import Annotated, Any, List, Union

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
)
from pydantic_core import PydanticCustomError


class Genre(str, Enum):
    """Closed set of genres a movie may carry"""
    ACTION = "Action"
    DRAMA = "Drama"
    CRIME = "Crime"
    ADVENTURE = "Adventure"
    SCI_FI = "Sci-Fi"
    ROMANCE = "Romance"
    ANIMATION = "Animation"
    BIOGRAPHY = "Biography"
    FANTASY = "Fantasy"


_url_adapter = TypeAdapter(AnyUrl)


def check_poster_url(value: str) -> str:
    """Reject anything that does not parse as an absolute URL"""
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("url_parsing", "Movie poster must be a URL")
    return value


def whole_number(value: Any) -> Any:
    """JSON 2020.0 is still the integer 2020; 2020.5 is left for the int check to reject"""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def check_rate_range(value: Union[int, float]) -> Union[int, float]:
    if value < 0:
        raise PydanticCustomError("greater_than_equal", "Input should be greater than or equal to 0")
    if value > 10:
        raise PydanticCustomError("less_than_equal", "Input should be less than or equal to 10")
    return value


# Field rules shared by the stored record and the request schemas
Title = Annotated[StrictStr, Field(min_length=1)]
Year = Annotated[StrictInt, Field(ge=1900, le=2024), BeforeValidator(whole_number)]
Duration = Annotated[StrictInt, Field(gt=0), BeforeValidator(whole_number)]
# Integers stay integers so a rate of 5 is echoed back as 5, not 5.0
Rate = Annotated[Union[StrictInt, StrictFloat], AfterValidator(check_rate_range)]
Poster = Annotated[StrictStr, AfterValidator(check_poster_url)]


class MovieFields(BaseModel):
    """Every field of a complete movie except its id"""
    title: Title = Field(..., description="Movie title")
    year: Year = Field(..., description="Release year")
    duration: Duration = Field(..., description="Duration in minutes")
    rate: Rate = Field(5, description="Rating (0-10)")
    poster: Poster = Field(..., description="Poster URL")
    genre: List[Genre] = Field(..., description="Genres")

    model_config = ConfigDict(use_enum_values=True)


class Movie(MovieFields):
    """
    Movie record as held by the store
    Always a complete record: partial updates are merged before storing
    """
    id: str

    def has_genre(self, genre: str) -> bool:
        """Case-insensitive genre membership"""
        wanted = genre.lower()
        return any(g.lower() == wanted for g in self.genre)
