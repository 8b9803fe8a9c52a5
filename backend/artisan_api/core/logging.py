from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .request_id import get_request_id

"""
Core Logging.

Rôle (fonctionnel) :
- Une ligne JSON par événement sur stdout, pour l’API, uvicorn et SQLAlchemy.
- Chaque ligne porte le service, le request_id courant et les extras passés au logger
  (method, path, status_code, duration_ms, artisan_id, ...).

Notes :
- Les extras ne sont pas déclarés à l’avance : tout attribut ajouté au LogRecord via
  `extra=` est recopié, hors attributs standards de logging.
- Les logs SQL de SQLAlchemy restent au niveau WARNING sauf en DEBUG.
"""

# Attributs présents sur tout LogRecord (jamais recopiés comme extras)
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "request_id"}


class RequestIdFilter(logging.Filter):
    """Ajoute request_id au LogRecord ('-' hors requête : démarrage, seed, ...)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


class JsonFormatter(logging.Formatter):
    """Formateur JSON : champs fixes puis extras du record."""

    def __init__(self, service: str = "artisan_api"):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "request_id": getattr(record, "request_id", "-"),
            "msg": record.getMessage(),
        }

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        # Decimal / datetime des lignes SQL -> str
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", service: str = "artisan_api") -> None:
    """
    Installe le handler JSON sur le root logger et y rattache uvicorn et SQLAlchemy.

    Idempotent : les handlers existants sont remplacés (rechargement uvicorn, tests).
    """
    lvl = level.upper()

    root = logging.getLogger()
    root.setLevel(lvl)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(service))
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)

    # uvicorn installe ses propres handlers : on les remplace, propagation coupée
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(name)
        logger.handlers = [handler]
        logger.propagate = False
        logger.setLevel(lvl)

    logging.getLogger("sqlalchemy.engine").setLevel(lvl if lvl == "DEBUG" else "WARNING")
