"""
Journal général : réceptions, livraisons, paiements et charges fusionnés
en une seule liste chronologique (date décroissante).
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from app.services.dto.filters import JournalFilters
from app.services.operation_service import effective_commission
from app.services.unit_of_work import UnitOfWork

_ZERO = Decimal("0")

DISPLAY_TYPES = {
    "reception": "Réception Stock",
    "livraison": "Vente Véhicule",
    "encaissement": "Encaissement",
    "decaissement": "Décaissement",
    "charge": "Charge",
}


@dataclass
class JournalEntry:
    id: int
    date: date
    original_type: str
    display_type: str
    account_id: int
    account_name: str
    description: str
    montant: Decimal
    commission: Decimal
    is_credit: bool


@dataclass
class JournalTotals:
    receptions: Decimal = _ZERO
    sales: Decimal = _ZERO
    commissions: Decimal = _ZERO
    encaissements: Decimal = _ZERO
    decaissements: Decimal = _ZERO
    charges: Decimal = _ZERO


def _account_name(entity) -> str:
    return entity.account.nom_compte if entity.account else "Inconnu"


def _collect_entries(uow: UnitOfWork) -> List[JournalEntry]:
    entries: List[JournalEntry] = []
    for op in uow.operations.list_all():
        is_sale = op.type_operation == "livraison"
        entries.append(
            JournalEntry(
                id=op.id,
                date=op.date_operation,
                original_type=op.type_operation,
                display_type=DISPLAY_TYPES.get(op.type_operation, op.type_operation),
                account_id=op.account_id,
                account_name=_account_name(op),
                description=f"{op.vehicle_label} - VIN: {op.numero_chassis or ''}",
                montant=Decimal(op.montant or 0),
                commission=effective_commission(op) if is_sale else _ZERO,
                is_credit=is_sale,
            )
        )
    for payment in uow.payments.list_all():
        entries.append(
            JournalEntry(
                id=payment.id,
                date=payment.date_paiement,
                original_type=payment.type_paiement,
                display_type=DISPLAY_TYPES.get(payment.type_paiement, payment.type_paiement),
                account_id=payment.account_id,
                account_name=_account_name(payment),
                description=payment.description or payment.reference or "Paiement",
                montant=Decimal(payment.montant or 0),
                commission=_ZERO,
                is_credit=payment.type_paiement == "encaissement",
            )
        )
    for charge in uow.charges.list_all():
        entries.append(
            JournalEntry(
                id=charge.id,
                date=charge.date_charge,
                original_type="charge",
                display_type=DISPLAY_TYPES["charge"],
                account_id=charge.account_id,
                account_name=_account_name(charge),
                description=charge.description or "Charge",
                montant=abs(Decimal(charge.montant or 0)),
                commission=_ZERO,
                is_credit=False,
            )
        )
    return entries


def _keep(entry: JournalEntry, filters: JournalFilters) -> bool:
    if filters.date_from and entry.date < filters.date_from:
        return False
    if filters.date_to and entry.date > filters.date_to:
        return False
    if filters.account_id and entry.account_id != filters.account_id:
        return False
    if filters.search:
        needle = filters.search.lower()
        if needle not in entry.description.lower() and needle not in entry.account_name.lower():
            return False
    if filters.entry_type == "paiement":
        return entry.original_type in ("encaissement", "decaissement")
    if filters.entry_type != "all":
        return entry.original_type == filters.entry_type
    return True


def build_journal(filters: Optional[JournalFilters] = None) -> List[JournalEntry]:
    filters = filters or JournalFilters()
    with UnitOfWork() as uow:
        entries = [e for e in _collect_entries(uow) if _keep(e, filters)]
    entries.sort(key=lambda e: e.date, reverse=True)
    return entries


def journal_totals(entries: Iterable[JournalEntry]) -> JournalTotals:
    """Totaux sur les lignes filtrées ; les commissions ne portent que sur les ventes."""
    totals = JournalTotals()
    for entry in entries:
        if entry.original_type == "reception":
            totals.receptions += entry.montant
        elif entry.original_type == "livraison":
            totals.sales += entry.montant
            totals.commissions += entry.commission
        elif entry.original_type == "encaissement":
            totals.encaissements += entry.montant
        elif entry.original_type == "decaissement":
            totals.decaissements += entry.montant
        elif entry.original_type == "charge":
            totals.charges += entry.montant
    return totals
