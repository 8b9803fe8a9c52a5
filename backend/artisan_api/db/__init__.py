"""
artisan_api.db

Package base de données :
- session : connexion unique et partagée (DatabaseClient) + dépendance FastAPI get_db.
- queries : construction des requêtes SQL paramétrées (dont l’UPDATE partiel dynamique).
- base    : Base déclarative SQLAlchemy (table artisans pour dev / tests).
"""
