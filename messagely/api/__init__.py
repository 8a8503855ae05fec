"""API router aggregator."""
from fastapi import APIRouter

from messagely.api.routes import auth, messages, users


def build_api_router(prefix: str = "") -> APIRouter:
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(auth.router)
    api_router.include_router(users.router)
    api_router.include_router(messages.router)
    return api_router


__all__ = ["build_api_router"]
