#!/usr/bin/env python3
"""
Script de gestion de l'application VMS Gestion.

Usage :
    python manage.py runserver                        # Lance le serveur de développement
    python manage.py create-db                        # Crée les tables de la base MySQL
    python manage.py import-xlsx VMS_GESTION.xlsx     # Importe un classeur historique
    python manage.py create-admin EMAIL MOT_DE_PASSE  # Crée un administrateur
"""

import argparse
import logging
import os
import sys

from sqlalchemy.exc import OperationalError as SAOperationalError
from pymysql.err import OperationalError as MySQLOperationalError

from app import create_app
from app.extensions import db
from config import DevConfig

# ---------------------------------------------------------------------
# Logger CLI (hors contexte Flask)
# ---------------------------------------------------------------------
cli_logger = logging.getLogger("manage_cli")
cli_logger.setLevel(logging.INFO)

if not cli_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(levelname)s: %(name)s: %(message)s")
    )
    cli_logger.addHandler(handler)


# ---------------------------------------------------------------------
# Utilitaires
# ---------------------------------------------------------------------
def _import_all_models() -> None:
    """Garantit que tous les modèles sont enregistrés avant create_all()."""
    import app.models  # noqa: F401


def _log_connection_hint(app, error) -> None:
    cli_logger.error("Erreur de connexion ou de permissions MySQL : %s", error)
    cli_logger.info(
        "Vérifiez que MySQL est démarré et que l'utilisateur '%s' a accès à la base '%s'.",
        app.config.get("DB_USER"),
        app.config.get("DB_NAME"),
    )


# ---------------------------------------------------------------------
# Commandes
# ---------------------------------------------------------------------
def create_db(app) -> int:
    """Crée toutes les tables définies par les modèles SQLAlchemy."""
    with app.app_context():
        cli_logger.info("Création des tables dans la base de données...")
        try:
            _import_all_models()
            db.create_all()
            cli_logger.info("Base de données créée avec succès.")
            return 0
        except (SAOperationalError, MySQLOperationalError) as e:
            _log_connection_hint(app, e)
            return 1


def import_xlsx(app, file_path: str) -> int:
    """Importe le classeur et écrit import_report.json."""
    from app.services.import_service import run_import, write_import_report

    with app.app_context():
        try:
            report = run_import(file_path)
        except (SAOperationalError, MySQLOperationalError) as e:
            _log_connection_hint(app, e)
            return 1
        report_path = write_import_report(report)

    summary = report.summary
    cli_logger.info("Comptes importés : %s, mis à jour : %s, erreurs : %s",
                    summary.accounts_imported, summary.accounts_updated, summary.accounts_errors)
    cli_logger.info("Opérations importées : %s, erreurs : %s",
                    summary.operations_imported, summary.operations_errors)
    cli_logger.info("Charges importées : %s, erreurs : %s",
                    summary.charges_imported, summary.charges_errors)
    for warning in report.warnings:
        cli_logger.warning(warning)
    for error in report.errors[:10]:
        cli_logger.error(error)
    if len(report.errors) > 10:
        cli_logger.error("... et %s autres erreurs (voir le rapport)", len(report.errors) - 10)

    cli_logger.info("Import terminé avec le statut '%s'. Rapport : %s", report.status, report_path)
    return 1 if report.status == "error" else 0


def create_admin(app, email: str, password: str) -> int:
    from app.services.errors import ServiceError
    from app.services.user_service import create_user

    with app.app_context():
        try:
            user = create_user(email, password, "admin")
        except ServiceError as e:
            cli_logger.error("Création impossible : %s", e.message)
            return 1
        except (SAOperationalError, MySQLOperationalError) as e:
            _log_connection_hint(app, e)
            return 1
        cli_logger.info("Administrateur créé : %s", user.email)
    return 0


def run_server(app) -> int:
    """Lance le serveur de développement Flask (accessible sur le LAN)."""
    host = os.environ.get("FLASK_RUN_HOST", "0.0.0.0")
    port = int(os.environ.get("FLASK_RUN_PORT", "5000"))
    debug = app.config.get("DEBUG", False)

    app.logger.info("Démarrage du serveur sur http://%s:%s", host, port)
    app.run(host=host, port=port, debug=debug)
    return 0


# ---------------------------------------------------------------------
# Point d'entrée
# ---------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Gestion de l'application VMS Gestion.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("runserver", help="Lance le serveur de développement.")
    subparsers.add_parser("create-db", help="Crée les tables de la base de données.")

    import_parser = subparsers.add_parser("import-xlsx", help="Importe un classeur Excel.")
    import_parser.add_argument("file", help="Chemin du fichier .xlsx")

    admin_parser = subparsers.add_parser("create-admin", help="Crée un utilisateur administrateur.")
    admin_parser.add_argument("email")
    admin_parser.add_argument("password")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Application avec la configuration de développement
    app = create_app(DevConfig)

    if args.command == "runserver":
        return run_server(app)
    if args.command == "create-db":
        return create_db(app)
    if args.command == "import-xlsx":
        return import_xlsx(app, args.file)
    return create_admin(app, args.email, args.password)


if __name__ == "__main__":
    sys.exit(main())
