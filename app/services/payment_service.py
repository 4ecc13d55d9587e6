"""
Services pour les paiements (encaissements / décaissements).
Réécrit sur le pattern Unit of Work.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

from app.models import Payment, PAYMENT_MODES, PAYMENT_TYPES
from app.services.dto.filters import PaymentFilters
from app.services.errors import NotFoundError, ValidationError
from app.services.ledger_service import calculate_account_balance
from app.services.logging import log_structured_event
from app.services.unit_of_work import UnitOfWork
from app.services.validators import (
    optional_text,
    parse_date,
    parse_int,
    parse_positive_amount,
    require_choice,
)

logger = logging.getLogger(__name__)

SETTLEMENT_REFERENCE = "Règlement Solde"


@dataclass
class SettlementForm:
    """Formulaire pré-rempli pour solder un compte."""

    account_id: int
    date_paiement: date
    montant: Decimal
    type_paiement: str
    mode_paiement: str
    reference: str
    description: str


def list_payments(filters: Optional[PaymentFilters] = None) -> List[Payment]:
    """Paiements par date décroissante, filtrés par période, type et texte libre."""
    filters = filters or PaymentFilters()
    needle = (filters.search or "").lower()
    with UnitOfWork() as uow:
        result = []
        for payment in uow.payments.list_all_ordered():
            if filters.date_from and payment.date_paiement < filters.date_from:
                continue
            if filters.date_to and payment.date_paiement > filters.date_to:
                continue
            if filters.type_paiement != "all" and payment.type_paiement != filters.type_paiement:
                continue
            if needle:
                account_name = payment.account.nom_compte if payment.account else ""
                fields = (account_name, payment.description, payment.reference)
                if not any(needle in (value or "").lower() for value in fields):
                    continue
            result.append(payment)
        return result


def create_payment(
    account_id: Any,
    date_paiement: Any,
    montant: Any,
    type_paiement: str,
    mode_paiement: str = "especes",
    reference: Optional[str] = None,
    description: Optional[str] = None,
    operation_id: Any = None,
) -> Payment:
    amount = parse_positive_amount(montant, "Montant")
    type_paiement = require_choice(type_paiement, PAYMENT_TYPES, "Type de paiement")
    mode_paiement = require_choice(mode_paiement or "especes", PAYMENT_MODES, "Mode de paiement")
    day = parse_date(date_paiement, "Date")

    with UnitOfWork() as uow:
        account = uow.accounts.get_by_id(parse_int(account_id, "Compte"))
        if account is None:
            raise ValidationError("Compte introuvable.")

        linked_operation_id = None
        if operation_id not in (None, ""):
            operation = uow.operations.get_by_id(parse_int(operation_id, "Opération"))
            if operation is None:
                raise ValidationError("Opération introuvable.")
            linked_operation_id = operation.id

        payment = Payment(
            account_id=account.id,
            operation_id=linked_operation_id,
            date_paiement=day,
            montant=amount,
            type_paiement=type_paiement,
            mode_paiement=mode_paiement,
            reference=optional_text(reference),
            description=optional_text(description),
        )
        uow.payments.add(payment)
        uow.commit()

        log_structured_event(
            "payment_created",
            message="Paiement enregistré.",
            payment_id=payment.id,
            account_id=account.id,
            type_paiement=type_paiement,
            montant=amount,
        )
        return payment


def delete_payment(payment_id: int) -> None:
    with UnitOfWork() as uow:
        payment = uow.payments.get_by_id(payment_id)
        if payment is None:
            raise NotFoundError("Paiement introuvable.")
        uow.payments.delete(payment)
        uow.commit()
    log_structured_event("payment_deleted", payment_id=payment_id)


def build_settlement(account_id: int, today: Optional[date] = None) -> SettlementForm:
    """
    Prépare le règlement total du solde : encaissement pour un client,
    décaissement pour les autres comptes.
    """
    with UnitOfWork() as uow:
        account = uow.accounts.get_by_id(account_id)
        if account is None:
            raise NotFoundError("Compte introuvable.")
        nom = account.nom_compte
        is_client = account.is_client

    solde = calculate_account_balance(account_id)
    return SettlementForm(
        account_id=account_id,
        date_paiement=today or date.today(),
        montant=abs(solde),
        type_paiement="encaissement" if is_client else "decaissement",
        mode_paiement="especes",
        reference=SETTLEMENT_REFERENCE,
        description=f"Règlement total du solde pour {nom}",
    )
