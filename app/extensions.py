"""
Module qui contient les extensions Flask partagées (db, logging, ...).
"""

import json
import logging
import os
import sqlite3
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

# Instance globale de SQLAlchemy, initialisée dans create_app()
db = SQLAlchemy()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """
    SQLite n'applique les clés étrangères que sur demande.
    Sans ce PRAGMA, la suppression d'un compte référencé passerait en silence.
    """
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class JsonFormatter(logging.Formatter):
    """
    Formatter qui produit des logs au format JSON.

    Champs principaux :
    - timestamp : ISO 8601
    - level : niveau du log (INFO, ERROR, ...)
    - logger : nom du logger
    - module : module source
    - message : message du log
    - extra : champs passés via extra={...}
    """

    _STANDARD_ATTRS = {
        "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
        "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
        "created", "msecs", "relativeCreated", "thread", "threadName",
        "processName", "process", "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self._STANDARD_ATTRS
        }
        if extra_fields:
            log_record["extra"] = extra_fields

        return json.dumps(log_record, ensure_ascii=False, default=str)


def init_extensions(app: Flask) -> None:
    """
    Initialise toutes les extensions liées à l'application Flask.

    Appelée par create_app().
    """
    db.init_app(app)
    _init_logging(app)


def _init_logging(app: Flask) -> None:
    """
    Configure le logging applicatif :

    - handler fichier (RotatingFileHandler)
    - handler console
    - formatter JSON structuré

    Les handlers ne sont posés qu'une fois sur le root logger, même si
    create_app() est appelée plusieurs fois (tests).
    """
    log_dir = app.config.get("LOG_DIR")
    log_file_name = app.config.get("LOG_FILE_NAME", "app.log")
    log_level_name = app.config.get("LOG_LEVEL", "INFO")
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, log_file_name)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not getattr(root_logger, "_json_logging_configured", False):
        json_formatter = JsonFormatter()

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(json_formatter)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(json_formatter)

        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)

        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)
        root_logger._json_logging_configured = True  # type: ignore[attr-defined]

    for handler in root_logger.handlers:
        handler.setLevel(log_level)

    app.logger.setLevel(log_level)

    app.logger.info(
        "Logging JSON initialisé.",
        extra={
            "component": "logging",
            "log_path": log_path,
            "level": log_level_name,
        },
    )
