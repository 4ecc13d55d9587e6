"""
Services pour la gestion des paramètres applicatifs.
"""

import os
from flask import current_app


def get_setting(key: str, default: str = "") -> str:
    return current_app.config.get(key, default)


def get_currency_label() -> str:
    return get_setting("CURRENCY_LABEL", "DA") or "DA"


def get_import_report_path() -> str:
    """Chemin absolu du rapport JSON écrit après un import de classeur."""
    configured_path = current_app.config.get("IMPORT_REPORT_PATH")
    if configured_path:
        target = os.path.abspath(configured_path)
    else:
        target = os.path.join(os.getcwd(), "import_report.json")
    os.makedirs(os.path.dirname(target), exist_ok=True)
    return target
