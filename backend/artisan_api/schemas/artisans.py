from __future__ import annotations

import math
import re
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict

"""
Schemas Artisans (Pydantic).

Rôle (fonctionnel) :
- Définit le contrat HTTP de la ressource artisans (création, mise à jour partielle, sortie).
- Valide l’identifiant de chemin (`parse_artisan_id`).

Notes :
- Le corps est lu tel quel (aucune validation de type, donc jamais de 422) ; les champs
  inconnus sont ignorés (extra="ignore"), un corps qui n’est pas un objet vaut {}.
- Les règles “nom/profession obligatoires” et “au moins un champ à modifier” sont
  appliquées dans les handlers (messages 400 imposés par le contrat HTTP), pas ici.
- ArtisanUpdate distingue “absent” et “présent à null” via model_fields_set.
"""

ArtisanId = Union[int, float]

# Littéraux numériques acceptés pour un id de chemin
_INT_RE = re.compile(r"[+-]?\d+")
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_PREFIXED_RE = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITY_RE = re.compile(r"[+-]?Infinity")


def parse_artisan_id(raw: str) -> Optional[ArtisanId]:
    """
    Interprète l’id de chemin comme un nombre.

    Accepte entiers, décimaux, notation exponentielle, hexadécimal/octal/binaire préfixés
    et Infinity ; les espaces autour sont ignorés et une chaîne vide vaut 0.
    Retourne None si la valeur n’est pas un nombre.

    Les valeurs non entières sont renvoyées telles quelles : la base les rejette
    ou ne trouve aucune ligne.
    """
    s = raw.strip()
    if not s:
        return 0
    if _INT_RE.fullmatch(s):
        return int(s)
    if _PREFIXED_RE.fullmatch(s):
        return int(s, 0)
    if _INFINITY_RE.fullmatch(s):
        return float(s.replace("Infinity", "inf"))
    if _DECIMAL_RE.fullmatch(s):
        value = float(s)
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return value
    return None


def is_truthy(value: Any) -> bool:
    """
    Vrai pour toute valeur JSON “renseignée”.

    Seuls null, false, 0, "" et NaN sont vides : une liste ou un objet vide compte
    comme renseigné (ils atteignent la base, qui les rejette).
    """
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and not math.isnan(value)
    return True


def or_default(value: Any, default: Any) -> Any:
    """Remplace une valeur vide (au sens de is_truthy) par le défaut."""
    return value if is_truthy(value) else default


class _ArtisanBody(BaseModel):
    """
    Corps JSON brut d’une requête artisans.

    Les valeurs ne sont pas typées : un type inattendu est transmis tel quel à la
    base, qui le stocke ou le rejette (500 de stockage de la route).
    """
    nom: Any = None
    profession: Any = None
    telephone: Any = None
    adresse: Any = None
    note: Any = None

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_body(cls, body: Any):
        """Un corps absent ou qui n’est pas un objet JSON est lu comme {}."""
        return cls.model_validate(body if isinstance(body, dict) else {})


class ArtisanCreate(_ArtisanBody):
    """Payload de création : nom et profession vérifiés (valeurs “truthy”) dans le handler."""


class ArtisanUpdate(_ArtisanBody):
    """Payload de mise à jour partielle (seules les clés présentes sont appliquées)."""

    def changes(self) -> dict[str, Any]:
        """Champs présents dans le corps, y compris ceux envoyés explicitement à null."""
        return self.model_dump(exclude_unset=True)


class ArtisanOut(BaseModel):
    """Sortie API d’un artisan : la ligne telle que la base la renvoie."""
    id: int
    nom: Any = None
    profession: Any = None
    telephone: Any = None
    adresse: Any = None
    note: Any = None

    model_config = ConfigDict(from_attributes=True)
