from .series import Series, SeriesBase, SeriesDetail, SeriesIssue
from .artists import Artist, ArtistCredit, ArtistDetail, CreditedComicBook, Role
from .comic_books import (
    ComicBook,
    ComicBookCreate,
    ComicBookListItem,
    ComicBookUpdate,
    Credit,
    CreditCreate,
)
from .common import (
    CountResponse,
    DeleteResponse,
    HealthCheckResponse,
    create_delete_response,
)

__all__ = [
    "Series",
    "SeriesBase",
    "SeriesDetail",
    "SeriesIssue",
    "Artist",
    "ArtistCredit",
    "ArtistDetail",
    "CreditedComicBook",
    "Role",
    "ComicBook",
    "ComicBookCreate",
    "ComicBookListItem",
    "ComicBookUpdate",
    "Credit",
    "CreditCreate",
    "CountResponse",
    "DeleteResponse",
    "HealthCheckResponse",
    "create_delete_response",
]
