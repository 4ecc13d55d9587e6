"""
Conversion et contrôle des valeurs saisies dans les formulaires.

Les montants acceptent la virgule comme séparateur décimal et les espaces
de groupement ("1 250 000,50").
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional

from app.services.errors import ValidationError

_CENT = Decimal("0.01")


def parse_decimal(value: Any, label: str, *, required: bool = True) -> Optional[Decimal]:
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f"Le champ « {label} » est obligatoire.")
        return None
    if isinstance(value, Decimal):
        number = value
    else:
        raw = str(value).replace("\u00a0", "").replace(" ", "").replace(",", ".")
        try:
            number = Decimal(raw)
        except InvalidOperation:
            raise ValidationError(f"Le champ « {label} » doit être un nombre.")
    if not number.is_finite():
        raise ValidationError(f"Le champ « {label} » doit être un nombre.")
    return number.quantize(_CENT)


def parse_positive_amount(value: Any, label: str = "Montant") -> Decimal:
    amount = parse_decimal(value, label)
    if amount <= 0:
        raise ValidationError(f"Le champ « {label} » doit être supérieur à zéro.")
    return amount


def parse_date(value: Any, label: str = "Date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not str(value).strip():
        raise ValidationError(f"Le champ « {label} » est obligatoire.")
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Le champ « {label} » n'est pas une date valide (AAAA-MM-JJ).")


def parse_int(value: Any, label: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Le champ « {label} » est obligatoire.")


def require_text(value: Any, label: str) -> str:
    text = (value or "").strip() if value is not None else ""
    if not text:
        raise ValidationError(f"Le champ « {label} » est obligatoire.")
    return text


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_choice(value: Any, choices: Iterable[str], label: str) -> str:
    text = (value or "").strip().lower()
    if text not in choices:
        raise ValidationError(f"Valeur invalide pour « {label} » : {value!r}.")
    return text
