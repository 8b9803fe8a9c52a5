from __future__ import annotations

from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from artisan_api.db.base import Base

"""
Model Artisan.

Rôle (fonctionnel) :
- Décrit la table `artisans` (seule entité du service).
- Sert à créer le schéma en dev / tests ; les handlers n’utilisent pas l’ORM
  mais des requêtes SQL paramétrées (voir artisan_api.db.queries).

Champs :
- id : clé primaire entière, attribuée par la base.
- nom / profession : obligatoires.
- telephone / adresse : optionnels (NULL).
- note : flottant, 0.0 par défaut.
"""


class Artisan(Base):
    __tablename__ = "artisans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    nom: Mapped[str] = mapped_column(Text, nullable=False)
    profession: Mapped[str] = mapped_column(Text, nullable=False)

    telephone: Mapped[str | None] = mapped_column(Text, nullable=True)
    adresse: Mapped[str | None] = mapped_column(Text, nullable=True)

    note: Mapped[float | None] = mapped_column(Float, nullable=True, default=0.0)
