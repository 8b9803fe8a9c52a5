"""
scripts

Scripts de maintenance lancés à la main (ex : seed_demo.py pour remplir une base de dev).

Note :
- Les scripts ne contiennent pas de logique “centrale” :
  ils réutilisent la connexion et les requêtes de `artisan_api.db`.
"""
