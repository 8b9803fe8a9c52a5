from fastapi import APIRouter, Request

from artisan_api.core.settings import settings

"""
API Health.

Rôle (fonctionnel) :
- Endpoint simple pour vérifier que l’API répond (ne lit pas la table).
- Indique l’environnement et l’état de la connexion partagée.
"""

router = APIRouter()


@router.get("/health")
def health(request: Request):
    db = getattr(request.app.state, "db", None)
    return {
        "status": "ok",
        "env": settings.ENV,
        "database": "connected" if db is not None and db.connected else "disconnected",
    }
