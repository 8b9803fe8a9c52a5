from sqlalchemy.orm import DeclarativeBase

"""
DB Base.

Rôle (fonctionnel) :
- Définit la classe Base SQLAlchemy commune aux modèles ORM.
- Sa metadata permet de créer la table artisans en dev / tests (DB_CREATE_TABLES) ;
  le schéma de production reste géré hors de ce service.
"""


class Base(DeclarativeBase):
    """Classe racine ORM (SQLAlchemy Declarative)."""
    pass
