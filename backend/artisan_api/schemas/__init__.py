"""
artisan_api.schemas

Schémas API (Pydantic) : contrat HTTP / validation, distincts de la persistance
(artisan_api.models) et des requêtes SQL (artisan_api.db.queries).
"""
