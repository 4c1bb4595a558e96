"""Versioned API router. Route groups are nested here under their prefixes."""

from fastapi import APIRouter

from src.greeting.routes import router as greeting_router


def build_api_router(prefix: str) -> APIRouter:
    """Compose every route group under the API prefix (e.g. /api/v1)."""
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(greeting_router)
    return api_router
