"""
Dérivation de l'état du stock.

Un véhicule est en stock s'il a été réceptionné et que son numéro de
châssis n'apparaît dans aucune livraison. Rien n'est stocké : l'état est
recalculé à chaque appel à partir des opérations.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List, Optional, Set

from app.models import Operation
from app.services.unit_of_work import UnitOfWork


@dataclass
class StockSummary:
    items: List[Operation] = field(default_factory=list)
    count: int = 0
    total_value: Decimal = Decimal("0")


def normalize_vin(vin: Optional[str]) -> str:
    return (vin or "").strip().upper()


def sold_vins(operations: Iterable[Operation]) -> Set[str]:
    """Numéros de châssis présents dans au moins une livraison."""
    return {
        normalize_vin(op.numero_chassis)
        for op in operations
        if op.type_operation == "livraison" and normalize_vin(op.numero_chassis)
    }


def compute_stock(operations: Iterable[Operation]) -> List[Operation]:
    """
    Réceptions dont le châssis n'a pas été livré.

    Une réception sans numéro de châssis (lignes importées du classeur)
    n'est jamais en stock : elle ne peut pas être vendue.
    """
    operations = list(operations)
    sold = sold_vins(operations)
    stock = []
    for op in operations:
        if op.type_operation != "reception":
            continue
        vin = normalize_vin(op.numero_chassis)
        if vin and vin not in sold:
            stock.append(op)
    return stock


def _matches(op: Operation, needle: str) -> bool:
    haystack = (op.marque, op.modele, op.numero_chassis)
    return any(needle in (value or "").lower() for value in haystack)


def get_stock(search: Optional[str] = None) -> StockSummary:
    with UnitOfWork() as uow:
        items = compute_stock(uow.operations.list_all_ordered())

    needle = (search or "").strip().lower()
    if needle:
        items = [op for op in items if _matches(op, needle)]

    total = sum((Decimal(op.montant or 0) for op in items), Decimal("0"))
    return StockSummary(items=items, count=len(items), total_value=total)


def list_available_models() -> List[str]:
    """Libellés "marque modele" distincts des véhicules en stock, triés."""
    items = get_stock().items
    return sorted({op.vehicle_label for op in items if op.vehicle_label})


def list_stock_for_model(label: str) -> List[Operation]:
    return [op for op in get_stock().items if op.vehicle_label == label]
