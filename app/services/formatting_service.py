"""
Helpers pour le formatage centralisé des nombres, montants et dates.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from flask import current_app, has_app_context

from app.services.settings_service import get_currency_label, get_setting

_TRUE_VALUES = {"1", "true", "yes", "on"}

_FRENCH_MONTHS = (
    "janv.", "févr.", "mars", "avr.", "mai", "juin",
    "juil.", "août", "sept.", "oct.", "nov.", "déc.",
)


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_VALUES


def use_thousands_separator() -> bool:
    cached = current_app.config.get("FORMAT_THOUSANDS_SEPARATOR")
    if cached is None:
        cached = get_setting("FORMAT_THOUSANDS_SEPARATOR", "0")
        current_app.config["FORMAT_THOUSANDS_SEPARATOR"] = cached
    return _parse_bool(cached)


def _to_decimal(value: Any) -> Optional[Decimal]:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None


def format_number(value: Any, decimals: int = 2, use_grouping: Optional[bool] = None) -> str:
    if value in (None, ""):
        return ""
    number = _to_decimal(value)
    if number is None:
        return str(value)

    if decimals < 0:
        decimals = 0
    if use_grouping is None:
        use_grouping = use_thousands_separator()

    quant = Decimal("1") if decimals == 0 else Decimal("1").scaleb(-decimals)
    try:
        number = number.quantize(quant)
    except InvalidOperation:
        pass

    format_spec = f",.{decimals}f" if use_grouping else f".{decimals}f"
    return format(number, format_spec)


def format_amount(value: Any, use_grouping: Optional[bool] = None) -> str:
    return format_number(value, decimals=2, use_grouping=use_grouping)


def format_int(value: Any, use_grouping: Optional[bool] = None) -> str:
    return format_number(value, decimals=0, use_grouping=use_grouping)


def _currency_label() -> str:
    return get_currency_label() if has_app_context() else "DA"


def _grouped(value: Any, decimal_mark: str) -> str:
    number = _to_decimal(value if value not in (None, "") else 0)
    if number is None:
        number = Decimal("0")
    text = format(number.quantize(Decimal("0.01")), ",.2f")
    # "1,234,567.50" -> groupes séparés par des espaces
    integer, fraction = text.split(".")
    return f"{integer.replace(',', ' ')}{decimal_mark}{fraction}"


def format_currency(value: Any) -> str:
    """1234567.5 -> "1 234 567,50 DA" """
    return f"{_grouped(value, ',')} {_currency_label()}"


def format_currency_safe(value: Any) -> str:
    """Variante ASCII pour les PDF : "1 234 567.50 DA"."""
    return f"{_grouped(value, '.')} {_currency_label()}"


def format_date(value: Any) -> str:
    """date(2025, 1, 5) -> "05 janv. 2025"; accepte aussi "AAAA-MM-JJ"."""
    if value in (None, ""):
        return ""
    if isinstance(value, str):
        try:
            value = datetime.strptime(value[:10], "%Y-%m-%d").date()
        except ValueError:
            return value
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        return str(value)
    return f"{value.day:02d} {_FRENCH_MONTHS[value.month - 1]} {value.year}"


def format_datetime(value: Any) -> str:
    if value in (None, ""):
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    if not isinstance(value, datetime):
        return format_date(value)
    return f"{format_date(value)} {value:%H:%M}"


def calculate_percentage(value: Any, total: Any) -> int:
    total_dec = _to_decimal(total) or Decimal("0")
    if total_dec == 0:
        return 0
    value_dec = _to_decimal(value) or Decimal("0")
    ratio = value_dec / total_dec * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
