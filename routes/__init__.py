from .comic_books import router as comic_books_router
from .series import router as series_router
from .artists import router as artists_router, roles_router

__all__ = [
    "comic_books_router",
    "series_router",
    "artists_router",
    "roles_router",
]
