"""
pytest configuration and fixtures.

L’API tourne sur une base SQLite temporaire (aiosqlite) créée à chaque test :
les vraies requêtes SQL sont exécutées, sans PostgreSQL.
"""

from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from artisan_api.core.settings import settings
from artisan_api.db import queries
from artisan_api.db.queries import Query
from artisan_api.main import app


@pytest.fixture
def client(tmp_path, monkeypatch) -> Iterator[TestClient]:
    """Client HTTP avec lifespan (connexion ouverte + table créée)."""
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'artisans.db'}")
    monkeypatch.setattr(settings, "DB_CREATE_TABLES", True)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def executed(client, monkeypatch) -> list[Query]:
    """Liste des requêtes réellement envoyées à la base pendant le test."""
    db = client.app.state.db
    original = db.execute
    calls: list[Query] = []

    async def spy(query: Query):
        calls.append(query)
        return await original(query)

    monkeypatch.setattr(db, "execute", spy)
    return calls


@pytest.fixture
def broken_db(client, monkeypatch) -> None:
    """Toute requête échoue comme si la base avait coupé la connexion."""

    async def fail(query: Query):
        raise OperationalError(query.sql, {}, Exception("server closed the connection unexpectedly"))

    monkeypatch.setattr(client.app.state.db, "execute", fail)


@pytest.fixture
def racing_delete(client, monkeypatch) -> None:
    """Supprime la ligne juste avant l’UPDATE ou le DELETE (suppression concurrente simulée)."""
    db = client.app.state.db
    original = db.execute

    async def execute(query: Query):
        if query.sql.startswith(("UPDATE", "DELETE")):
            await original(queries.delete_by_id(query.params[-1]))
        return await original(query)

    monkeypatch.setattr(db, "execute", execute)


@pytest.fixture
def fatima(client) -> dict:
    """Artisan minimal déjà créé."""
    response = client.post("/artisans", json={"nom": "Fatima", "profession": "Potter"})
    assert response.status_code == 201
    return response.json()
