from fastapi import APIRouter

from .artisans import router as artisans_router
from .health import router as health_router

"""
Router principal de l’API.

Rôle (fonctionnel) :
- Regroupe les routeurs (health, artisans).
- Sert de point d’entrée unique pour l’inclusion dans l’application FastAPI.
"""

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(artisans_router)
