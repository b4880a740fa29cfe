"""Main API router for v1."""
from fastapi import APIRouter

from sanctuary.api.v1.endpoints import auth, sessions, checkins

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["Sessions"])
api_router.include_router(checkins.router, tags=["Check-ins"])
