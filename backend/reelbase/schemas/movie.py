"""
Reelbase Backend — Movie Schemas
==================================

What:  Pydantic models for the movie API contract.
How:   FastAPI validates request bodies against the input models and
       serializes documents through MovieResponse.

Field names follow the stored documents exactly (`Movie_ID`, `Title`,
`imdbRating`, ...). The catalogue was seeded from OMDb exports, so the names
are not snake_case and must stay as they are.

Coercion only: "5" becomes 5 for `Movie_ID` and 2020 becomes "2020" for
text fields; nothing else is checked. Form submissions arrive as strings and
JSON clients send numbers for dates, so both directions are accepted. The
one bound is the store's: `Movie_ID` must fit a signed 64-bit integer.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Fields the update routes are allowed to touch, whatever else the body holds
UPDATABLE_FIELDS = ("Title", "Released")

# BSON stores integers as int64 at most
MOVIE_ID_MIN = -(2 ** 63)
MOVIE_ID_MAX = 2 ** 63 - 1


class MovieCreate(BaseModel):
    """
    What:  Body of POST /api/movies (JSON or the add form).
    How:   Only these six fields are read from the body; anything else the
           client sends is dropped.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    Movie_ID: int = Field(
        ge=MOVIE_ID_MIN,
        le=MOVIE_ID_MAX,
        description="Caller-assigned business key, unique",
    )
    Title: str = Field(description="Movie title")
    Released: Optional[str] = Field(default=None, description="Release date as free text")
    Genre: Optional[str] = Field(default=None, description="Comma-separated genres")
    Director: Optional[str] = Field(default=None)
    Plot: Optional[str] = Field(default=None)


class MovieUpdate(BaseModel):
    """
    What:  Body of PUT /api/movies/{id} and POST /api/movies/update/{id}.

    Only `Title` and `Released` exist on this model, so a payload carrying
    `Plot` or `Genre` cannot change them. Fields the client omits stay unset
    and are not written.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    Title: Optional[str] = None
    Released: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """The allow-listed fields the client actually sent, non-null."""
        data = self.model_dump(exclude_unset=True)
        return {
            field: data[field]
            for field in UPDATABLE_FIELDS
            if field in data and data[field] is not None
        }


class MovieResponse(BaseModel):
    """
    What:  A stored movie document as returned by the API.

    Every schema field is optional apart from the two required keys, and
    unknown fields are passed through. Routes serialize with
    `response_model_exclude_unset=True`, so the JSON mirrors the stored
    document rather than listing forty nulls.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: Optional[str] = Field(default=None, alias="_id", description="Store identity")
    Movie_ID: int
    Title: str
    Year: Optional[Union[int, str]] = None
    Rated: Optional[str] = None
    Released: Optional[str] = None
    Runtime: Optional[str] = None
    Genre: Optional[str] = None
    Director: Optional[str] = None
    Writer: Optional[str] = None
    Actors: Optional[str] = None
    Plot: Optional[str] = None
    Language: Optional[str] = None
    Country: Optional[str] = None
    Awards: Optional[str] = None
    Poster: Optional[str] = None
    Ratings: Optional[Any] = None  # {Source, Value} or an OMDb list of them
    Metascore: Optional[str] = None
    imdbRating: Optional[Union[float, str]] = None
    imdbVotes: Optional[str] = None
    imdbID: Optional[str] = None
    Type: Optional[str] = None
    tomatoMeter: Optional[str] = None
    tomatoImage: Optional[str] = None
    tomatoRating: Optional[str] = None
    tomatoReviews: Optional[str] = None
    tomatoFresh: Optional[str] = None
    tomatoRotten: Optional[str] = None
    tomatoConsensus: Optional[str] = None
    tomatoUserMeter: Optional[str] = None
    tomatoUserRating: Optional[str] = None
    tomatoUserReviews: Optional[str] = None
    tomatoURL: Optional[str] = None
    DVD: Optional[str] = None
    BoxOffice: Optional[str] = None
    Production: Optional[str] = None
    Website: Optional[str] = None
    Response: Optional[bool] = None
    Image: Optional[str] = None
