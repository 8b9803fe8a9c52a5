"""
artisan_api.models

Modèles ORM (SQLAlchemy) décrivant les tables persistées.
"""

from artisan_api.models.artisan import Artisan

__all__ = ["Artisan"]
