from __future__ import annotations

import uvicorn

from artisan_api.core.settings import settings

"""
Lancement du serveur : `python -m artisan_api` (depuis backend/) ou `artisan-api`.

Si la connexion base échoue au démarrage, uvicorn refuse de démarrer
et le process se termine avec un code de sortie non nul.
"""


def main() -> None:
    uvicorn.run(
        "artisan_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # logging JSON déjà configuré par artisan_api.core.logging
    )


if __name__ == "__main__":
    main()
