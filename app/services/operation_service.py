"""
Services pour les réceptions (entrées en stock) et les livraisons (ventes).

Règle de prix d'une réception : l'utilisateur saisit le prix brut par
véhicule (prix_unitaire) et la commission ; le prix de base vaut
prix_unitaire - commission et le montant quantite * prix_unitaire.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from app.models import Operation
from app.services.dto.filters import OperationFilters
from app.services.errors import (
    NotFoundError,
    ValidationError,
    VehicleAlreadySoldError,
    VehicleNotInStockError,
)
from app.services.logging import log_structured_event
from app.services.stock_service import compute_stock, normalize_vin, sold_vins
from app.services.unit_of_work import UnitOfWork
from app.services.validators import (
    parse_date,
    parse_decimal,
    parse_int,
    require_text,
)

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


@dataclass
class ReceptionRow:
    operation: Operation
    is_sold: bool


def effective_commission(op: Operation) -> Decimal:
    """
    Commission enregistrée, sinon prix_unitaire - prix_achat.

    Sans commission ni prix d'achat (ventes importées), la commission vaut 0.
    """
    if op.commission is not None:
        return Decimal(op.commission)
    if op.prix_achat is None:
        return Decimal("0")
    return Decimal(op.prix_unitaire or 0) - Decimal(op.prix_achat)


def _filter_operations(operations: Iterable[Operation], filters: OperationFilters) -> List[Operation]:
    result = []
    needle = (filters.search or "").lower()
    for op in operations:
        if filters.date_from and op.date_operation < filters.date_from:
            continue
        if filters.date_to and op.date_operation > filters.date_to:
            continue
        if needle:
            account_name = op.account.nom_compte if op.account else ""
            fields = (op.marque, op.modele, op.numero_chassis, account_name)
            if not any(needle in (value or "").lower() for value in fields):
                continue
        result.append(op)
    return result


def _get_account_or_fail(uow: UnitOfWork, account_id: Any):
    account = uow.accounts.get_by_id(parse_int(account_id, "Compte"))
    if account is None:
        raise ValidationError("Compte introuvable.")
    return account


def _reception_prices(prix_unitaire: Any, commission: Any):
    gross = parse_decimal(prix_unitaire, "Prix unitaire")
    comm = parse_decimal(commission, "Commission", required=False) or _ZERO
    if gross < 0 or comm < 0:
        raise ValidationError("Les prix et la commission doivent être positifs.")
    if comm > gross:
        raise ValidationError("La commission ne peut pas dépasser le prix unitaire.")
    return gross, comm, gross - comm


# --------------------------------------------------------------------------- #
# Réceptions
# --------------------------------------------------------------------------- #


def list_receptions(filters: Optional[OperationFilters] = None) -> List[ReceptionRow]:
    """Réceptions filtrées (date desc), chacune avec son indicateur "vendu"."""
    filters = filters or OperationFilters()
    with UnitOfWork() as uow:
        operations = uow.operations.list_all_ordered()
        sold = sold_vins(operations)
        receptions = [op for op in operations if op.is_reception]
        return [
            ReceptionRow(operation=op, is_sold=normalize_vin(op.numero_chassis) in sold)
            for op in _filter_operations(receptions, filters)
        ]


def create_receptions(
    account_id: Any,
    date_operation: Any,
    marque: str,
    modele: str,
    vins: Iterable[str],
    prix_unitaire: Any,
    commission: Any = None,
) -> List[Operation]:
    """
    Crée une réception par numéro de châssis (quantite = 1).

    Le lot est refusé en entier si un châssis est vide, répété dans le lot
    ou déjà réceptionné.
    """
    day = parse_date(date_operation, "Date")
    marque = require_text(marque, "Marque")
    modele = require_text(modele, "Modèle")
    gross, comm, base = _reception_prices(prix_unitaire, commission)

    normalized = [normalize_vin(v) for v in (vins or [])]
    if not normalized:
        raise ValidationError("Saisissez au moins un numéro de châssis.")
    if any(not vin for vin in normalized):
        raise ValidationError("Un numéro de châssis est vide.")
    seen = set()
    for vin in normalized:
        if vin in seen:
            raise ValidationError(f"Le châssis {vin} est saisi plusieurs fois.")
        seen.add(vin)

    with UnitOfWork() as uow:
        account = _get_account_or_fail(uow, account_id)
        for vin in normalized:
            if uow.operations.find_reception_by_vin(vin) is not None:
                raise ValidationError(f"Le châssis {vin} a déjà été réceptionné.")

        created = []
        for vin in normalized:
            op = Operation(
                type_operation="reception",
                account_id=account.id,
                date_operation=day,
                quantite=1,
                marque=marque,
                modele=modele,
                numero_chassis=vin,
                prix_unitaire=gross,
                prix_achat=base,
                commission=comm,
            )
            op.compute_montant()
            uow.operations.add(op)
            created.append(op)
        uow.commit()

        log_structured_event(
            "receptions_created",
            message="Lot de réceptions enregistré.",
            account_id=account.id,
            count=len(created),
            marque=marque,
            modele=modele,
        )
        return created


def update_reception(
    reception_id: int,
    account_id: Any,
    date_operation: Any,
    marque: str,
    modele: str,
    numero_chassis: str,
    prix_unitaire: Any,
    commission: Any = None,
) -> Operation:
    vin = normalize_vin(numero_chassis)
    if not vin:
        raise ValidationError("Le numéro de châssis est obligatoire.")

    with UnitOfWork() as uow:
        op = uow.operations.get_by_id(reception_id)
        if op is None or not op.is_reception:
            raise NotFoundError("Réception introuvable.")

        old_vin = normalize_vin(op.numero_chassis)
        if vin != old_vin:
            if uow.operations.find_livraison_by_vin(old_vin) is not None:
                raise VehicleAlreadySoldError(
                    "Ce véhicule a déjà été livré : son numéro de châssis ne peut plus changer."
                )
            if uow.operations.find_reception_by_vin(vin) is not None:
                raise ValidationError(f"Le châssis {vin} a déjà été réceptionné.")

        account = _get_account_or_fail(uow, account_id)
        gross, comm, base = _reception_prices(prix_unitaire, commission)

        op.account_id = account.id
        op.date_operation = parse_date(date_operation, "Date")
        op.marque = require_text(marque, "Marque")
        op.modele = require_text(modele, "Modèle")
        op.numero_chassis = vin
        op.prix_unitaire = gross
        op.commission = comm
        op.prix_achat = base
        op.compute_montant()
        uow.commit()

        log_structured_event("reception_updated", operation_id=op.id)
        return op


def delete_reception(reception_id: int) -> None:
    """Refusé si le véhicule a déjà été livré."""
    with UnitOfWork() as uow:
        op = uow.operations.get_by_id(reception_id)
        if op is None or not op.is_reception:
            raise NotFoundError("Réception introuvable.")
        vin = normalize_vin(op.numero_chassis)
        if vin and uow.operations.find_livraison_by_vin(vin) is not None:
            raise VehicleAlreadySoldError()
        uow.operations.delete(op)
        uow.commit()
    log_structured_event("reception_deleted", operation_id=reception_id, vin=vin)


# --------------------------------------------------------------------------- #
# Livraisons
# --------------------------------------------------------------------------- #


def list_livraisons(filters: Optional[OperationFilters] = None) -> List[Operation]:
    filters = filters or OperationFilters()
    with UnitOfWork() as uow:
        livraisons = uow.operations.list_by_type("livraison")
        return _filter_operations(livraisons, filters)


def _sale_prices(prix_unitaire: Any, commission: Any, prix_achat: Decimal, default_price: Decimal):
    price = parse_decimal(prix_unitaire, "Prix de vente", required=False)
    if price is None:
        price = default_price
    if price < 0:
        raise ValidationError("Le prix de vente doit être positif.")
    comm = parse_decimal(commission, "Commission", required=False)
    if comm is None:
        comm = price - prix_achat
    return price, comm


def create_livraison(
    account_id: Any,
    date_operation: Any,
    reception_id: Any,
    prix_unitaire: Any = None,
    commission: Any = None,
) -> Operation:
    """
    Vend un véhicule en stock. Marque, modèle, châssis et prix par défaut
    sont repris de la réception.
    """
    day = parse_date(date_operation, "Date")
    with UnitOfWork() as uow:
        account = _get_account_or_fail(uow, account_id)
        reception = uow.operations.get_by_id(parse_int(reception_id, "Véhicule"))
        if reception is None or not reception.is_reception:
            raise VehicleNotInStockError("Véhicule introuvable.")

        stock_ids = {op.id for op in compute_stock(uow.operations.list_all_ordered())}
        if not normalize_vin(reception.numero_chassis) or reception.id not in stock_ids:
            raise VehicleNotInStockError()

        prix_achat = Decimal(reception.prix_achat or 0)
        price, comm = _sale_prices(
            prix_unitaire, commission, prix_achat, Decimal(reception.montant or 0)
        )

        op = Operation(
            type_operation="livraison",
            account_id=account.id,
            date_operation=day,
            quantite=1,
            marque=reception.marque,
            modele=reception.modele,
            numero_chassis=normalize_vin(reception.numero_chassis) or None,
            prix_unitaire=price,
            prix_achat=prix_achat,
            commission=comm,
        )
        op.compute_montant()
        uow.operations.add(op)
        uow.commit()

        log_structured_event(
            "livraison_created",
            message="Livraison enregistrée.",
            operation_id=op.id,
            account_id=account.id,
            vin=op.numero_chassis,
            montant=op.montant,
        )
        return op


def update_livraison(
    livraison_id: int,
    account_id: Any,
    date_operation: Any,
    prix_unitaire: Any = None,
    commission: Any = None,
) -> Operation:
    """Le véhicule vendu ne change pas ; seuls client, date et prix sont modifiables."""
    with UnitOfWork() as uow:
        op = uow.operations.get_by_id(livraison_id)
        if op is None or not op.is_livraison:
            raise NotFoundError("Livraison introuvable.")
        account = _get_account_or_fail(uow, account_id)
        price, comm = _sale_prices(
            prix_unitaire,
            commission,
            Decimal(op.prix_achat or 0),
            Decimal(op.prix_unitaire or 0),
        )
        op.account_id = account.id
        op.date_operation = parse_date(date_operation, "Date")
        op.prix_unitaire = price
        op.commission = comm
        op.compute_montant()
        uow.commit()

        log_structured_event("livraison_updated", operation_id=op.id)
        return op


def delete_livraison(livraison_id: int) -> None:
    """Supprime la livraison : le véhicule revient en stock."""
    with UnitOfWork() as uow:
        op = uow.operations.get_by_id(livraison_id)
        if op is None or not op.is_livraison:
            raise NotFoundError("Livraison introuvable.")
        vin = op.numero_chassis
        uow.operations.delete(op)
        uow.commit()
    log_structured_event("livraison_deleted", operation_id=livraison_id, vin=vin)


def get_operation(operation_id: int) -> Operation:
    with UnitOfWork() as uow:
        op = uow.operations.get_by_id(operation_id)
        if op is None:
            raise NotFoundError("Opération introuvable.")
        return op


def parse_vin_list(raw: Optional[str]) -> List[str]:
    """Découpe la saisie du formulaire (un châssis par ligne, virgules acceptées)."""
    if not raw:
        return []
    parts = raw.replace(",", "\n").replace(";", "\n").splitlines()
    return [part for part in (p.strip() for p in parts) if part]
