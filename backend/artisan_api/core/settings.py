from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

"""
Core Settings.

Rôle (fonctionnel) :
- Centralise la configuration de l’application via variables d’environnement (Pydantic Settings).
- Charge un fichier .env (par défaut backend/.env) pour faciliter le dev/local.
- Fournit un objet global `settings` importable dans tout le projet.

Organisation :
- App : nom, env, debug, niveau de log.
- Serveur : host + port d’écoute (port fixe 3000 par défaut).
- CORS : origines autorisées (front).
- DB : paramètres PostgreSQL (DB_HOST, DB_PORT, ...) ou URL complète (DATABASE_URL).
"""

# Pointe toujours vers backend/.env (racine backend/)
ENV_PATH = Path(__file__).resolve().parents[2] / ".env"  # backend/.env


class Settings(BaseSettings):
    # --- App ---
    APP_NAME: str = "Artisans API"
    ENV: str = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    SLOW_REQUEST_MS: int = 800

    # --- Serveur ---
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # --- CORS ---
    # Liste CSV des origines autorisées (vide => origines de dev)
    CORS_ORIGINS: str = ""

    # --- DB (PostgreSQL via asyncpg) ---
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "artisans"

    # URL SQLAlchemy complète : prioritaire sur DB_* si renseignée (ex: sqlite+aiosqlite en test)
    DATABASE_URL: str = ""

    # Crée la table artisans au démarrage (dev / tests uniquement, pas de migrations)
    DB_CREATE_TABLES: bool = False

    # Config Pydantic Settings
    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def database_url(self) -> str | URL:
        """URL de connexion : DATABASE_URL si fournie, sinon construite depuis DB_*."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "postgresql+asyncpg",
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )


# Instance globale importable
settings = Settings()
