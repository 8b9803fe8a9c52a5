from __future__ import annotations

import time
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from artisan_api.api.router import api_router
from artisan_api.core.settings import settings
from artisan_api.core.logging import setup_logging
from artisan_api.core.errors import INVALID_BODY, error_payload, AppHTTPException
from artisan_api.core.request_id import request_id_scope
from artisan_api.db.session import DatabaseClient

"""
Application FastAPI (entrypoint).

Rôle (fonctionnel) :
- Ouvre la connexion base au démarrage (lifespan) : échec => démarrage refusé,
  le process s’arrête avec un code non nul (pas de mode dégradé).
- Configure l’application (settings, CORS, middlewares, routers).
- Centralise l’observabilité :
  - request_id propagé (X-Request-Id)
  - logs structurés JSON (timing, status, client_ip)
  - seuil de “slow request”
- Uniformise les erreurs côté client : {"error": "<message>"}.

Ce fichier ne contient pas de logique de ressource :
- Les routes sont dans artisan_api.api
- Les composants transverses sont dans artisan_api.core
"""


class UTF8JSONResponse(JSONResponse):
    """Réponse JSON avec charset UTF-8 explicite (cohérent sur tous les endpoints)."""
    media_type = "application/json; charset=utf-8"


setup_logging(settings.LOG_LEVEL, service=settings.APP_NAME)

# logger principal projet
log = logging.getLogger("artisan_api")

# logger dédié observabilité HTTP
http_log = logging.getLogger("artisan_api.http")


def _split_origins(value: str) -> list[str]:
    """Parse une liste d’origines CORS depuis une string 'a,b,c'."""
    if not value:
        return []
    return [o.strip() for o in value.split(",") if o.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connexion unique : ouverte au démarrage, fermée à l’arrêt."""
    db = DatabaseClient(settings.database_url())
    try:
        await db.connect()
    except Exception as exc:
        log.error("Database connection failed: %s", exc)
        raise

    if settings.DB_CREATE_TABLES:
        await db.create_tables()

    app.state.db = db
    log.info("Server ready on port %s", settings.PORT)
    try:
        yield
    finally:
        await db.close()
        app.state.db = None


app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    default_response_class=UTF8JSONResponse,
    lifespan=lifespan,
)

# --- CORS ---
origins = _split_origins(settings.CORS_ORIGINS)

default_dev_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or default_dev_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-Id"],
)

# --- Routers ---
app.include_router(api_router)


# --- Middleware observabilité : request_id + timing + logs structurés ---
@app.middleware("http")
async def request_observability(request: Request, call_next):
    with request_id_scope(request.headers.get("X-Request-Id")) as rid:
        request.state.request_id = rid

        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            response.headers["X-Request-Id"] = rid
            return response
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)

            level = logging.WARNING if duration_ms >= settings.SLOW_REQUEST_MS else logging.INFO
            http_log.log(
                level,
                "request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": getattr(response, "status_code", None),
                    "duration_ms": duration_ms,
                    "client_ip": request.client.host if request.client else None,
                },
            )


# --- Error handlers : {"error": ...}, pas de stacktrace côté client ---
@app.exception_handler(AppHTTPException)
async def app_http_exception_handler(request: Request, exc: AppHTTPException):
    """Erreurs applicatives (400 / 404 / 500 de stockage) -> payload standard."""
    return UTF8JSONResponse(status_code=exc.status_code, content=error_payload(exc.message))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Erreurs HTTP natives (404 route inconnue, 405, etc.) -> payload standard."""
    return UTF8JSONResponse(
        status_code=exc.status_code,
        content=error_payload(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """JSON illisible -> 400 (les corps sont reçus bruts : aucune erreur de type possible)."""
    log.info("invalid_body", extra={"method": request.method, "path": request.url.path})
    return UTF8JSONResponse(status_code=400, content=error_payload(INVALID_BODY))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Fallback : toute exception non gérée -> 500 + log serveur."""
    log.exception("Unhandled error: %s", exc)
    return UTF8JSONResponse(status_code=500, content=error_payload("Internal server error"))
