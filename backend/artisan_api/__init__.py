"""
artisan_api

Package racine du backend Artisans API (CRUD HTTP sur la table `artisans`).

Organisation :
- artisan_api.api     : routes FastAPI (contrats HTTP, dépendances)
- artisan_api.core    : briques transverses (settings, errors, logs, request_id)
- artisan_api.db      : connexion partagée + construction des requêtes SQL
- artisan_api.models  : modèle ORM de la table (création du schéma en dev / tests)
- artisan_api.schemas : schémas Pydantic (entrées/sorties API)
"""
