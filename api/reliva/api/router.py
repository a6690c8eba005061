"""API router composition for all route groups."""

from fastapi import APIRouter

from .routes import books, music, onboarding, saavn, tmdb, users, youtube

api_router = APIRouter()
api_router.include_router(saavn.router, tags=["saavn"])
api_router.include_router(music.router, tags=["music"])
api_router.include_router(books.router, tags=["books"])
api_router.include_router(tmdb.router, prefix="/tmdb", tags=["tmdb"])
api_router.include_router(youtube.router, prefix="/youtube", tags=["youtube"])
api_router.include_router(users.router, tags=["users"])
api_router.include_router(onboarding.router, prefix="/onboarding", tags=["onboarding"])
