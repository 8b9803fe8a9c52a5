from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

"""
DB Queries.

Rôle (fonctionnel) :
- Construit les requêtes SQL paramétrées de la ressource artisans.
- Les valeurs ne sont jamais concaténées dans le texte SQL : chaque valeur
  correspond à un placeholder numéroté (:p1, :p2, ...) et au paramètre de même rang.

Requête dynamique (UPDATE partiel) :
- On parcourt les colonnes dans un ordre fixe (nom, profession, telephone, adresse, note).
- Une colonne est retenue si la clé est *présente* dans la requête (None / 0 compris).
- Fragments "col = :pN" et paramètres avancent ensemble ; l’id est toujours le dernier paramètre.
"""

TABLE = "artisans"

# Ordre fixe des colonnes modifiables (INSERT et UPDATE)
ARTISAN_FIELDS = ("nom", "profession", "telephone", "adresse", "note")


def param_name(position: int) -> str:
    return f"p{position}"


def placeholder(position: int) -> str:
    """Placeholder nommé pour le paramètre de rang `position` (à partir de 1)."""
    return f":{param_name(position)}"


@dataclass(frozen=True)
class Query:
    """Texte SQL + vecteur de paramètres positionnels (p1 = params[0], ...)."""

    sql: str
    params: tuple[Any, ...] = ()

    def bind_params(self) -> dict[str, Any]:
        return {param_name(i): value for i, value in enumerate(self.params, start=1)}


def select_all() -> Query:
    return Query(f"SELECT * FROM {TABLE}")


def select_by_id(artisan_id: int | float) -> Query:
    return Query(f"SELECT * FROM {TABLE} WHERE id = {placeholder(1)}", (artisan_id,))


def insert_artisan(
    nom: Any,
    profession: Any,
    telephone: Any,
    adresse: Any,
    note: Any,
) -> Query:
    columns = ", ".join(ARTISAN_FIELDS)
    values = ", ".join(placeholder(i) for i in range(1, len(ARTISAN_FIELDS) + 1))
    sql = f"INSERT INTO {TABLE} ({columns}) VALUES ({values}) RETURNING *"
    return Query(sql, (nom, profession, telephone, adresse, note))


def update_artisan(artisan_id: int | float, changes: Mapping[str, Any]) -> Optional[Query]:
    """
    UPDATE partiel : ne touche que les colonnes présentes dans `changes`.

    Retourne None si aucune colonne reconnue n’est présente (rien à mettre à jour).
    Les clés inconnues sont ignorées.
    """
    assignments: list[str] = []
    params: list[Any] = []

    for column in ARTISAN_FIELDS:
        if column not in changes:
            continue
        params.append(changes[column])
        assignments.append(f"{column} = {placeholder(len(params))}")

    if not assignments:
        return None

    params.append(artisan_id)
    sql = (
        f"UPDATE {TABLE} SET {', '.join(assignments)} "
        f"WHERE id = {placeholder(len(params))} RETURNING *"
    )
    return Query(sql, tuple(params))


def delete_by_id(artisan_id: int | float) -> Query:
    return Query(f"DELETE FROM {TABLE} WHERE id = {placeholder(1)}", (artisan_id,))
