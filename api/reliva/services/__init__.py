from . import (
    book_service,
    catalog_seed,
    music_service,
    preference_service,
    resolver,
    screen_service,
    user_service,
    video_service,
)

__all__ = [
    "book_service",
    "catalog_seed",
    "music_service",
    "preference_service",
    "resolver",
    "screen_service",
    "user_service",
    "video_service",
]
