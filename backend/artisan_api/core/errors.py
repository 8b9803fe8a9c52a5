from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

"""
Core Errors.

Rôle (fonctionnel) :
- Standardise le format des erreurs renvoyées par l’API (payload plat et stable).
- Fournit une exception applicative (AppHTTPException) pour lever des erreurs de façon cohérente.
- Convertit toute erreur de stockage (driver / SQLAlchemy) en 500 générique :
  le détail est loggé côté serveur, jamais renvoyé au client.

Convention de réponse (exemple) :
{
  "error": "Artisan not found."
}
"""

# Messages fixes exposés au client
ID_NOT_A_NUMBER = "ID must be a number."
# 404 de GET ; PUT et DELETE répondent ARTISAN_NOT_FOUND
GET_NOT_FOUND = "had khona rah makayanach wa ghayaraha."
ARTISAN_NOT_FOUND = "Artisan not found."
INVALID_BODY = "Invalid request body."
REQUIRED_FIELDS = 'Fields "nom" and "profession" are required.'
NO_FIELDS_TO_UPDATE = "No fields to update."


class DatabaseConnectionError(RuntimeError):
    """La connexion à la base n’est pas (ou plus) disponible."""


# Erreurs de stockage rattrapées à la frontière des handlers
STORAGE_ERRORS = (SQLAlchemyError, OSError, DatabaseConnectionError)


def error_payload(message: str) -> Dict[str, Any]:
    """Construit un payload d’erreur homogène pour l’API."""
    return {"error": message}


class AppHTTPException(HTTPException):
    """
    Exception applicative standardisée.

    Usage :
    - Lever une erreur (validation, absence, stockage) avec un message explicite.
    - Laisser le handler d’exception de l’app produire {"error": message}.

    Exemple :
        raise AppHTTPException(404, "Artisan not found.")
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(status_code=status_code, detail=message)
        self.message = message


@contextmanager
def storage_errors(message: str, logger: logging.Logger) -> Iterator[None]:
    """
    Frontière stockage -> HTTP.

    Toute erreur SQLAlchemy / réseau levée dans le bloc est loggée avec sa stacktrace
    puis remplacée par une AppHTTPException(500, message). Les AppHTTPException
    levées dans le bloc (400/404) traversent sans modification.
    """
    try:
        yield
    except STORAGE_ERRORS as exc:
        logger.exception("%s: %s", message, exc)
        raise AppHTTPException(500, message) from exc
