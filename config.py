"""
Module de configuration de l'application Flask.
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Configuration de base, commune à tous les environnements."""

    # Clé secrète : en production elle doit venir d'une variable d'environnement
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # --- BASE DE DONNÉES MYSQL -----------------------------------------------
    DB_USER = os.environ.get("DB_USER", "vms")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "vms")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = os.environ.get("DB_PORT", "3306")
    DB_NAME = os.environ.get("DB_NAME", "vms_gestion")

    DEFAULT_DB_URL = (
        f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    )

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", DEFAULT_DB_URL)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- IMPORT CLASSEUR -----------------------------------------------------
    # Rapport JSON écrit par `manage.py import-xlsx`
    IMPORT_REPORT_PATH = os.environ.get(
        "IMPORT_REPORT_PATH", str(BASE_DIR / "import_report.json")
    )

    # --- FORMATAGE ---------------------------------------------------------------
    FORMAT_THOUSANDS_SEPARATOR = os.environ.get("FORMAT_THOUSANDS_SEPARATOR", "1")
    CURRENCY_LABEL = os.environ.get("CURRENCY_LABEL", "DA")

    # --- UTILISATEUR FICTIF (auth_stub) ------------------------------------------
    # Pas d'authentification réelle : le rôle pilote uniquement l'affichage
    # et les pages réservées.
    STUB_USER_EMAIL = os.environ.get("STUB_USER_EMAIL", "admin@vms.dz")
    STUB_USER_ROLE = os.environ.get("STUB_USER_ROLE", "admin")

    # --- LOGGING -------------------------------------------------------------
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE_NAME = os.environ.get("LOG_FILE_NAME", "app.log")


class DevConfig(Config):
    """Configuration pour l'environnement de développement."""
    DEBUG = True
    ENV = "development"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProdConfig(Config):
    """Configuration pour l'environnement de production."""
    DEBUG = False
    ENV = "production"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestConfig(Config):
    """Configuration des tests : SQLite en mémoire, pas de fichiers de log persistants."""
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_LEVEL = "WARNING"
    LOG_DIR = os.environ.get("TEST_LOG_DIR", str(BASE_DIR / "logs" / "tests"))
    STUB_USER_ROLE = "admin"
