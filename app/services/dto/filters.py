"""DTO et helpers pour les filtres des listes (opérations, paiements, journal)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional


class _QueryArgsParser:
    @staticmethod
    def _parse_date(value: Any) -> Optional[date]:
        if not value:
            return None
        if isinstance(value, date):
            return value
        try:
            return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
        except ValueError:
            return None

    @staticmethod
    def _parse_int(value: Any) -> Optional[int]:
        if value in (None, ""):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _parse_decimal(value: Any) -> Optional[Decimal]:
        if value in (None, ""):
            return None
        try:
            return Decimal(str(value).replace(" ", "").replace(",", "."))
        except (InvalidOperation, AttributeError):
            return None

    @staticmethod
    def _parse_text(value: Any) -> Optional[str]:
        text = (value or "").strip() if isinstance(value, str) else value
        return text or None


@dataclass
class OperationFilters(_QueryArgsParser):
    """Filtres des listes de réceptions et de livraisons."""

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    search: Optional[str] = None

    @classmethod
    def from_query_args(cls, args: Mapping[str, Any]) -> "OperationFilters":
        return cls(
            date_from=cls._parse_date(args.get("date_from", "")),
            date_to=cls._parse_date(args.get("date_to", "")),
            search=cls._parse_text(args.get("search")),
        )


PAYMENT_FILTER_TYPES = ("all", "encaissement", "decaissement")


@dataclass
class PaymentFilters(_QueryArgsParser):
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    type_paiement: str = "all"
    search: Optional[str] = None

    @classmethod
    def from_query_args(cls, args: Mapping[str, Any]) -> "PaymentFilters":
        type_paiement = (args.get("type") or "all").strip().lower()
        if type_paiement not in PAYMENT_FILTER_TYPES:
            type_paiement = "all"
        return cls(
            date_from=cls._parse_date(args.get("date_from", "")),
            date_to=cls._parse_date(args.get("date_to", "")),
            type_paiement=type_paiement,
            search=cls._parse_text(args.get("search")),
        )


JOURNAL_FILTER_TYPES = ("all", "reception", "livraison", "paiement", "charge")


@dataclass
class JournalFilters(_QueryArgsParser):
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    account_id: Optional[int] = None
    search: Optional[str] = None
    entry_type: str = "all"

    @classmethod
    def from_query_args(cls, args: Mapping[str, Any]) -> "JournalFilters":
        entry_type = (args.get("type") or "all").strip().lower()
        if entry_type not in JOURNAL_FILTER_TYPES:
            entry_type = "all"
        return cls(
            date_from=cls._parse_date(args.get("date_from", "")),
            date_to=cls._parse_date(args.get("date_to", "")),
            account_id=cls._parse_int(args.get("account_id")),
            search=cls._parse_text(args.get("search")),
            entry_type=entry_type,
        )
