from __future__ import annotations

import logging
from typing import Any, List

from fastapi import APIRouter, Body
from starlette.responses import JSONResponse, Response

from artisan_api.api.deps import ArtisanIdDep, DbDep
from artisan_api.core.errors import (
    ARTISAN_NOT_FOUND,
    GET_NOT_FOUND,
    NO_FIELDS_TO_UPDATE,
    REQUIRED_FIELDS,
    AppHTTPException,
    storage_errors,
)
from artisan_api.db import queries
from artisan_api.db.session import DatabaseClient
from artisan_api.schemas.artisans import (
    ArtisanCreate,
    ArtisanId,
    ArtisanOut,
    ArtisanUpdate,
    is_truthy,
    or_default,
)

"""
API Artisans.

Rôle (fonctionnel) :
- Liste, lit, crée, met à jour (partiellement) et supprime des artisans.
- Chaque handler : validation -> requête SQL paramétrée -> réponse JSON.

Contrat d’erreurs :
- 400 : id non numérique (avant toute requête), champs obligatoires manquants, rien à mettre à jour.
- 404 : aucune ligne pour l’id ciblé.
- 500 : toute erreur de stockage, avec un message fixe par route (détail uniquement dans les logs).

Notes :
- Le corps JSON est reçu brut (Body(None)) : pas de validation de type, donc pas de 422.
- PUT et DELETE vérifient l’existence par une lecture séparée avant d’écrire :
  sans transaction, une suppression concurrente entre les deux reste possible.
"""

router = APIRouter(prefix="/artisans", tags=["artisans"])
log = logging.getLogger("artisan_api.artisans")


@router.get("", response_model=List[ArtisanOut])
async def list_artisans(db: DatabaseClient = DbDep):
    with storage_errors("Failed to retrieve artisans", log):
        result = await db.execute(queries.select_all())
    return result.rows


@router.get("/{artisan_id}", response_model=ArtisanOut)
async def get_artisan(pk: ArtisanId = ArtisanIdDep, db: DatabaseClient = DbDep):
    with storage_errors("Failed to fetch artisan", log):
        result = await db.execute(queries.select_by_id(pk))

    row = result.first()
    if row is None:
        raise AppHTTPException(404, GET_NOT_FOUND)
    return row


@router.post("", response_model=ArtisanOut, status_code=201)
async def create_artisan(body: Any = Body(None), db: DatabaseClient = DbDep):
    payload = ArtisanCreate.from_body(body)
    if not is_truthy(payload.nom) or not is_truthy(payload.profession):
        raise AppHTTPException(400, REQUIRED_FIELDS)

    # Valeurs vides remplacées par les défauts (note=0 compris)
    query = queries.insert_artisan(
        payload.nom,
        payload.profession,
        or_default(payload.telephone, None),
        or_default(payload.adresse, None),
        or_default(payload.note, 0.0),
    )

    with storage_errors("Failed to add artisan", log):
        result = await db.execute(query)

    created = result.first()
    log.info("artisan_created", extra={"artisan_id": created["id"]})
    return created


@router.put("/{artisan_id}", response_model=ArtisanOut)
async def update_artisan(
    body: Any = Body(None),
    pk: ArtisanId = ArtisanIdDep,
    db: DatabaseClient = DbDep,
):
    with storage_errors("Failed to update artisan", log):
        existing = await db.execute(queries.select_by_id(pk))
        if existing.first() is None:
            raise AppHTTPException(404, ARTISAN_NOT_FOUND)

        query = queries.update_artisan(pk, ArtisanUpdate.from_body(body).changes())
        if query is None:
            raise AppHTTPException(400, NO_FIELDS_TO_UPDATE)

        result = await db.execute(query)

    updated = result.first()
    if updated is None:
        # Ligne supprimée entre la vérification et l’UPDATE
        log.warning("artisan_update_no_row", extra={"artisan_id": pk})
        return JSONResponse(status_code=200, content=None)

    log.info("artisan_updated", extra={"artisan_id": pk})
    return updated


@router.delete("/{artisan_id}", status_code=204)
async def delete_artisan(pk: ArtisanId = ArtisanIdDep, db: DatabaseClient = DbDep):
    with storage_errors("Failed to delete artisan", log):
        existing = await db.execute(queries.select_by_id(pk))
        if existing.first() is None:
            raise AppHTTPException(404, ARTISAN_NOT_FOUND)

        await db.execute(queries.delete_by_id(pk))

    log.info("artisan_deleted", extra={"artisan_id": pk})
    return Response(status_code=204)
