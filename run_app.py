"""
Lancement rapide de l'application en une commande :

    python run_app.py

Utilise la factory create_app() et la configuration de développement.
L'environnement virtuel (.venv) doit être activé avant.
"""

from __future__ import annotations

import os

from app import create_app
from config import DevConfig


def main() -> None:
    app = create_app(DevConfig)
    host = os.environ.get("FLASK_RUN_HOST", "0.0.0.0")
    port = int(os.environ.get("FLASK_RUN_PORT", "5000"))

    app.logger.info("Démarrage via run_app.py", extra={"component": "launcher"})
    app.run(host=host, port=port, debug=app.config.get("DEBUG", False))


if __name__ == "__main__":
    main()
