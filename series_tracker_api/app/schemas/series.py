"""
Pydantic models for series data.

``SeriesCreate`` is the body of a create request, ``SeriesUpdate``
the body of a partial update and ``SeriesRead`` the stored record
returned by the API.
"""

from typing import Optional

from pydantic import BaseModel, Field


class SeriesBase(BaseModel):
    title: str = Field("", examples=["Breaking Bad"])
    overview: str = Field("", examples=["A chemistry teacher turns to crime."])
    poster: str = Field("", examples=["https://image.tmdb.org/t/p/w500/poster.jpg"])
    seasons: int = Field(0, ge=0, examples=[5])
    status: str = Field("", examples=["watching"])
    rating: float = Field(0.0, examples=[9.5])


class SeriesCreate(SeriesBase):
    """Schema for creating a series.

    An empty ``status`` is stored as ``"planned"``.
    """
    pass


class SeriesRead(SeriesBase):
    """Schema for reading a series from the API."""

    id: int

    model_config = {
        "from_attributes": True,
    }


class SeriesUpdate(BaseModel):
    """Schema for updating a series.

    All fields are optional; only fields that are present and not
    ``null`` are applied.  Which fields the client actually sent is
    available through ``model_fields_set``.  The title cannot be
    changed.
    """

    overview: Optional[str] = None
    poster: Optional[str] = None
    seasons: Optional[int] = Field(None, ge=0)
    status: Optional[str] = None
    rating: Optional[float] = None

    def provided(self) -> dict:
        """Return the fields that were sent with a non-null value."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }
