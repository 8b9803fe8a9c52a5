from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from artisan_api.core.errors import DatabaseConnectionError
from artisan_api.db.base import Base
from artisan_api.db.queries import Query
from artisan_api.models import Artisan  # noqa: F401  (enregistre la table dans Base.metadata)

"""
DB Session.

Rôle (fonctionnel) :
- Ouvre UNE connexion (SQLAlchemy async, driver asyncpg) au démarrage du process
  et la garde ouverte pendant toute sa durée de vie (pas de pool, pas de connexion par requête).
- Exécute des requêtes paramétrées (artisan_api.db.queries.Query) et renvoie
  les lignes (dicts) + le nombre de lignes affectées.
- Expose `get_db()` comme dépendance FastAPI (Depends(get_db)).

Notes :
- Chaque requête est validée (commit) individuellement : pas de transaction applicative.
- Un verrou asyncio met les requêtes en file sur la connexion (un driver ne peut pas
  exécuter deux requêtes en même temps sur une même connexion). Il ne protège pas
  une séquence “lecture puis écriture” d’un handler.
- echo=False : pas de log SQL brut (on préfère les logs applicatifs en JSON).
"""

log = logging.getLogger("artisan_api.db")


@dataclass
class QueryResult:
    """Lignes renvoyées (clé = nom de colonne) + métadonnée rowcount."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0

    def first(self) -> Optional[dict[str, Any]]:
        return self.rows[0] if self.rows else None


class DatabaseClient:
    """Connexion longue durée partagée par toutes les requêtes."""

    def __init__(self, url: str | URL):
        self.url = url
        self._engine: Optional[AsyncEngine] = None
        self._conn: Optional[AsyncConnection] = None
        self._lock: Optional[asyncio.Lock] = None

    @property
    def connected(self) -> bool:
        return self._conn is not None and not self._conn.closed

    async def connect(self) -> None:
        """Ouvre la connexion. Lève DatabaseConnectionError en cas d’échec."""
        try:
            self._engine = create_async_engine(self.url, echo=False)
            self._conn = await self._engine.connect()
        except (SQLAlchemyError, OSError) as exc:
            if self._engine is not None:
                await self._engine.dispose()
                self._engine = None
            raise DatabaseConnectionError(f"Database connection failed: {exc}") from exc

        self._lock = asyncio.Lock()
        log.info("Connected to database (%s)", self._engine.url.render_as_string(hide_password=True))

    async def create_tables(self) -> None:
        """Crée les tables déclarées (dev / tests) sur la connexion partagée."""
        conn = self._require_connection()
        async with self._lock:
            await conn.run_sync(Base.metadata.create_all)
            await conn.commit()

    async def execute(self, query: Query) -> QueryResult:
        """
        Exécute une requête paramétrée et la valide.

        Les erreurs SQLAlchemy / driver remontent à l’appelant après rollback.
        """
        conn = self._require_connection()
        async with self._lock:
            try:
                result = await conn.execute(text(query.sql), query.bind_params())
                rowcount = result.rowcount
                rows = [dict(row) for row in result.mappings().all()] if result.returns_rows else []
                await conn.commit()
            except SQLAlchemyError:
                await self._rollback_quietly(conn)
                raise

        return QueryResult(rows=rows, rowcount=rowcount)

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
        log.info("Database connection closed")

    def _require_connection(self) -> AsyncConnection:
        if self._conn is None or self._lock is None:
            raise DatabaseConnectionError("Database connection is not open")
        return self._conn

    @staticmethod
    async def _rollback_quietly(conn: AsyncConnection) -> None:
        # La connexion peut être déjà invalide : l’erreur d’origine reste prioritaire.
        try:
            await conn.rollback()
        except SQLAlchemyError as exc:
            log.warning("Rollback failed: %s", exc)


async def get_db(request: Request) -> DatabaseClient:
    """Dépendance FastAPI : la connexion partagée ouverte au démarrage (app.state.db)."""
    return request.app.state.db
