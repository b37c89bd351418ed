"""
Data models and types.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

from movie_client.utils import from_data_url, to_data_url

THUMBNAIL_MEDIA_TYPE = "image/png"


class MovieSummary(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    author: str
    image_ref: str = Field(default="", alias="image_url")
    avg_rating: float = 0.0
    num_ratings: int = 0


class ActionResponse(BaseModel):
    """Body of register, login and add-movie responses."""

    model_config = ConfigDict(populate_by_name=True)

    redirect_path: Optional[str] = Field(default=None, alias="redirectPath")
    message: Optional[str] = None
    error: Optional[str] = None


class RatingSubmission(BaseModel):
    movie_id: str
    rating: int = Field(ge=1, le=5)


@dataclass
class NewMovieDraft:
    title: str
    author: str
    image: bytes

    def to_payload(self) -> dict:
        return {"title": self.title, "author": self.author, "image": list(self.image)}


class DisplayableImage(NamedTuple):
    data_url: str

    @classmethod
    def from_bytes(cls, data: bytes, media_type: str = THUMBNAIL_MEDIA_TYPE) -> "DisplayableImage":
        return cls(to_data_url(data, media_type))

    @property
    def is_empty(self) -> bool:
        return not self.data_url

    def decode(self) -> bytes:
        if self.is_empty:
            return b""
        return from_data_url(self.data_url)


EMPTY_IMAGE = DisplayableImage("")
