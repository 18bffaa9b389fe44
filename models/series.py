from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import date


class SeriesBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None


class Series(SeriesBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


class SeriesIssue(BaseModel):
    """Cómic tal como se lista dentro de su serie."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    issue_number: int
    description: Optional[str] = None
    published_on: Optional[date] = None


class SeriesDetail(Series):
    comic_books: List[SeriesIssue] = []
