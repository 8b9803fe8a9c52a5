# backend/scripts/seed_demo.py
from __future__ import annotations

import argparse
import asyncio
import random
import sys
from pathlib import Path

# Permet de lancer le script depuis backend/ sans souci d'import
BACKEND_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_DIR))

from artisan_api.core.settings import settings
from artisan_api.db import queries
from artisan_api.db.queries import Query
from artisan_api.db.session import DatabaseClient


# ---- Données de démo ----
PRENOMS = ["Fatima", "Youssef", "Khadija", "Omar", "Salma", "Hamza", "Nadia", "Rachid", "Imane", "Karim"]

PROFESSIONS = [
    "Potier", "Menuisier", "Tisserand", "Dinandier", "Maroquinier",
    "Zellige", "Forgeron", "Bijoutier", "Tapissier", "Plâtrier",
]

VILLES = ["Fès", "Marrakech", "Safi", "Salé", "Tétouan", "Essaouira", "Meknès", "Rabat"]


def fake_artisan() -> Query:
    telephone = f"06{random.randint(10000000, 99999999)}" if random.random() < 0.8 else None
    adresse = f"Médina, {random.choice(VILLES)}" if random.random() < 0.7 else None
    return queries.insert_artisan(
        random.choice(PRENOMS),
        random.choice(PROFESSIONS),
        telephone,
        adresse,
        round(random.uniform(2.5, 5.0), 1),
    )


async def seed(reset: bool, n: int) -> None:
    db = DatabaseClient(settings.database_url())
    await db.connect()
    try:
        await db.create_tables()

        if reset:
            await db.execute(Query(f"DELETE FROM {queries.TABLE}"))
            print("✅ Reset done (all artisans deleted).")

        for _ in range(n):
            await db.execute(fake_artisan())

        total = await db.execute(queries.select_all())
        print("✅ Seed terminé.")
        print(f"   - Artisans ajoutés: {n}")
        print(f"   - Artisans en base: {len(total.rows)}")
    finally:
        await db.close()


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--reset", action="store_true", help="Supprime les artisans avant de reseed")
    parser.add_argument("--n", type=int, default=25, help="Nombre d'artisans à générer")
    parser.add_argument("--seed", type=int, default=42, help="Seed RNG pour reproductibilité")
    args = parser.parse_args()

    random.seed(args.seed)
    asyncio.run(seed(reset=args.reset, n=args.n))


if __name__ == "__main__":
    main()
