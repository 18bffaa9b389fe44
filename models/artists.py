from pydantic import BaseModel, ConfigDict
from typing import List


class Artist(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class Role(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CreditedComicBook(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    issue_number: int
    display_text: str


class ArtistCredit(BaseModel):
    """Un rol que tuvo un artista en un cómic."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    comic_book: CreditedComicBook
    role: Role


class ArtistDetail(Artist):
    comic_books: List[ArtistCredit] = []
