"""
Enregistrement des filtres Jinja pour l'interface.
"""

from __future__ import annotations

from flask import Flask

from app.services.formatting_service import (
    calculate_percentage,
    format_amount,
    format_currency,
    format_date,
    format_datetime,
    format_int,
    format_number,
)


def register_template_filters(app: Flask) -> None:
    app.add_template_filter(format_amount, "format_amount")
    app.add_template_filter(format_number, "format_number")
    app.add_template_filter(format_int, "format_int")
    app.add_template_filter(format_currency, "currency")
    app.add_template_filter(format_date, "date_fr")
    app.add_template_filter(format_datetime, "datetime_fr")
    app.add_template_global(calculate_percentage, "percentage")
