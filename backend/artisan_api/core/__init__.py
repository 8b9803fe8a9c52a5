"""
artisan_api.core

Briques transverses de l’API (ce qui ne dépend pas de la ressource artisans) :

- settings   : configuration (variables d’environnement / .env).
- errors     : format d’erreur {"error": ...}, AppHTTPException, frontière stockage -> 500.
- logging    : logs JSON sur stdout, enrichis du request_id.
- request_id : identifiant de corrélation propagé via X-Request-Id.
"""
