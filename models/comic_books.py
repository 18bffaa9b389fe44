from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import date

from .series import Series
from .artists import Artist, Role


class CreditCreate(BaseModel):
    artist_id: int
    role_id: int


class ComicBookBase(BaseModel):
    series_id: int
    issue_number: int = Field(..., ge=1)
    description: Optional[str] = None
    published_on: Optional[date] = None
    average_rating: Optional[float] = Field(None, ge=0, le=10)


class ComicBookCreate(ComicBookBase):
    artists: List[CreditCreate] = Field(default_factory=list)


class ComicBookUpdate(ComicBookBase):
    """Reemplazo completo de los campos de un cómic.

    Los campos opcionales omitidos en el payload se vacían en el almacén.
    """
    pass


class Credit(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    artist: Artist
    role: Role


class ComicBookListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    series_id: int
    issue_number: int
    display_text: str
    series: Series


class ComicBook(ComicBookListItem):
    description: Optional[str] = None
    published_on: Optional[date] = None
    average_rating: Optional[float] = None
    artists: List[Credit] = []
