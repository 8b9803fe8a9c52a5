from __future__ import annotations

from fastapi import Depends

from artisan_api.core.errors import ID_NOT_A_NUMBER, AppHTTPException
from artisan_api.db.session import DatabaseClient, get_db
from artisan_api.schemas.artisans import ArtisanId, parse_artisan_id

"""
Dépendances API.

Rôle (fonctionnel) :
- Centralise les dépendances réutilisables sur les routes.
- Ici : la connexion partagée et la validation de l’id de chemin
  (400 avant toute requête SQL si l’id n’est pas numérique).
"""


async def valid_artisan_id(artisan_id: str) -> ArtisanId:
    value = parse_artisan_id(artisan_id)
    if value is None:
        raise AppHTTPException(400, ID_NOT_A_NUMBER)
    return value


# Dépendances prêtes à l’emploi
DbDep = Depends(get_db)
ArtisanIdDep = Depends(valid_artisan_id)
