"""Router registrations for the todo service."""

from __future__ import annotations

from fastapi import APIRouter

from .auth import router as auth_router
from .categories import router as categories_router
from .health import router as health_router
from .todos import router as todos_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(categories_router)
api_router.include_router(todos_router)

__all__ = ["api_router", "auth_router", "categories_router", "health_router", "todos_router"]
