"""
Soldes et relevés de comptes.

Convention de signe (solde interne, point de vue de la concession) :

    réception       +montant   (nous devons au fournisseur)
    charge          +montant   (facturée par le compte)
    livraison       -montant   (le client nous doit)
    encaissement    +montant   (argent reçu du compte)
    décaissement    -montant   (argent versé au compte)

Solde = solde_initial + somme des mouvements signés. Tout est recalculé
à chaque appel à partir des lignes chargées.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from app.models import Account, Charge, Operation, Payment
from app.services.errors import NotFoundError
from app.services.operation_service import effective_commission
from app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


@dataclass
class Posting:
    date: date
    created_at: Optional[datetime]
    type_operation: str
    reference_id: int
    description: str
    montant: Decimal  # signé
    commission: Optional[Decimal] = None


@dataclass
class StatementLine:
    date: date
    type_operation: str
    reference_id: int
    description: str
    montant: Decimal
    commission: Optional[Decimal]
    solde_cumule: Decimal


@dataclass
class AccountStatement:
    account: Account
    date_from: Optional[date]
    date_to: Optional[date]
    solde_ouverture: Decimal
    solde_cloture: Decimal
    lines: List[StatementLine] = field(default_factory=list)


@dataclass
class AccountBalance:
    account_id: int
    code_compte: str
    nom_compte: str
    type_compte: str
    solde_initial: Decimal
    total_mouvements: Decimal
    solde_actuel: Decimal
    derniere_operation: Optional[date]
    actif: bool


@dataclass
class DashboardSummary:
    total_accounts: int = 0
    active_accounts: int = 0
    total_balance: Decimal = _ZERO
    total_receptions: Decimal = _ZERO
    total_livraisons: Decimal = _ZERO
    total_charges: Decimal = _ZERO
    total_commissions: Decimal = _ZERO
    total_client_due: Decimal = _ZERO
    total_payments: Decimal = _ZERO


@dataclass
class FinanceTotals:
    total_creances: Decimal = _ZERO
    total_dettes: Decimal = _ZERO


# --------------------------------------------------------------------------- #
# Mouvements signés
# --------------------------------------------------------------------------- #


def _dec(value) -> Decimal:
    return Decimal(value or 0)


def operation_posting(op: Operation) -> Posting:
    if op.type_operation == "livraison":
        return Posting(
            date=op.date_operation,
            created_at=op.created_at,
            type_operation="livraison",
            reference_id=op.id,
            description=f"Livraison {op.vehicle_label} {op.numero_chassis or ''}".strip(),
            montant=-_dec(op.montant),
            commission=effective_commission(op),
        )
    return Posting(
        date=op.date_operation,
        created_at=op.created_at,
        type_operation="reception",
        reference_id=op.id,
        description=f"Réception {op.vehicle_label} {op.numero_chassis or ''}".strip(),
        montant=_dec(op.montant),
    )


def payment_posting(payment: Payment) -> Posting:
    sign = 1 if payment.type_paiement == "encaissement" else -1
    label = "Encaissement" if sign > 0 else "Décaissement"
    description = payment.description or payment.reference or label
    return Posting(
        date=payment.date_paiement,
        created_at=payment.created_at,
        type_operation=payment.type_paiement,
        reference_id=payment.id,
        description=description,
        montant=sign * _dec(payment.montant),
    )


def charge_posting(charge: Charge) -> Posting:
    return Posting(
        date=charge.date_charge,
        created_at=charge.created_at,
        type_operation="charge",
        reference_id=charge.id,
        description=charge.description or "Charge",
        montant=abs(_dec(charge.montant)),
    )


def build_postings(
    operations: Iterable[Operation],
    payments: Iterable[Payment],
    charges: Iterable[Charge],
) -> List[Posting]:
    """Mouvements triés par date puis par date de création."""
    postings = (
        [operation_posting(op) for op in operations]
        + [payment_posting(p) for p in payments]
        + [charge_posting(c) for c in charges]
    )
    postings.sort(key=lambda p: (p.date, p.created_at or datetime.min, p.reference_id))
    return postings


def _load_account_postings(uow: UnitOfWork, account_id: int) -> List[Posting]:
    return build_postings(
        uow.operations.list_by_account(account_id),
        uow.payments.list_by_account(account_id),
        uow.charges.list_by_account(account_id),
    )


# --------------------------------------------------------------------------- #
# Soldes
# --------------------------------------------------------------------------- #


def calculate_account_balance(account_id: int) -> Decimal:
    with UnitOfWork() as uow:
        account = uow.accounts.get_by_id(account_id)
        if account is None:
            raise NotFoundError("Compte introuvable.")
        postings = _load_account_postings(uow, account_id)
        return _dec(account.solde_initial) + sum((p.montant for p in postings), _ZERO)


def _postings_by_account(uow: UnitOfWork) -> Dict[int, List[Posting]]:
    grouped: Dict[int, List[Posting]] = defaultdict(list)
    for op in uow.operations.list_all():
        grouped[op.account_id].append(operation_posting(op))
    for payment in uow.payments.list_all():
        grouped[payment.account_id].append(payment_posting(payment))
    for charge in uow.charges.list_all():
        grouped[charge.account_id].append(charge_posting(charge))
    return grouped


def list_account_balances() -> List[AccountBalance]:
    """Un solde par compte, trié par nom."""
    with UnitOfWork() as uow:
        accounts = uow.accounts.list_all_ordered()
        grouped = _postings_by_account(uow)

        balances = []
        for account in accounts:
            postings = grouped.get(account.id, [])
            total = sum((p.montant for p in postings), _ZERO)
            initial = _dec(account.solde_initial)
            balances.append(
                AccountBalance(
                    account_id=account.id,
                    code_compte=account.code_compte,
                    nom_compte=account.nom_compte,
                    type_compte=account.type_compte,
                    solde_initial=initial,
                    total_mouvements=total,
                    solde_actuel=initial + total,
                    derniere_operation=max((p.date for p in postings), default=None),
                    actif=bool(account.actif),
                )
            )
        return balances


def get_account_balance(account_id: int) -> AccountBalance:
    for balance in list_account_balances():
        if balance.account_id == account_id:
            return balance
    raise NotFoundError("Compte introuvable.")


def displayed_due(balance: AccountBalance) -> Decimal:
    """
    Montant affiché côté utilisateur : pour un client ce qu'il nous doit
    (solde négatif), pour les autres comptes ce que nous devons (solde positif).
    """
    if balance.type_compte == "client":
        return max(_ZERO, -balance.solde_actuel)
    return max(_ZERO, balance.solde_actuel)


def is_debt(balance: AccountBalance) -> bool:
    if balance.type_compte == "client":
        return balance.solde_actuel < 0
    return balance.solde_actuel > 0


# --------------------------------------------------------------------------- #
# Relevé
# --------------------------------------------------------------------------- #


def get_account_statement(
    account_id: int,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> AccountStatement:
    """
    Relevé d'un compte sur une période. Le solde courant part du solde
    initial augmenté des mouvements antérieurs à date_from.
    """
    with UnitOfWork() as uow:
        account = uow.accounts.get_by_id(account_id)
        if account is None:
            raise NotFoundError("Compte introuvable.")
        postings = _load_account_postings(uow, account_id)

        opening = _dec(account.solde_initial) + sum(
            (p.montant for p in postings if date_from and p.date < date_from), _ZERO
        )
        running = opening
        lines: List[StatementLine] = []
        for posting in postings:
            if date_from and posting.date < date_from:
                continue
            if date_to and posting.date > date_to:
                continue
            running += posting.montant
            lines.append(
                StatementLine(
                    date=posting.date,
                    type_operation=posting.type_operation,
                    reference_id=posting.reference_id,
                    description=posting.description,
                    montant=posting.montant,
                    commission=posting.commission,
                    solde_cumule=running,
                )
            )

        return AccountStatement(
            account=account,
            date_from=date_from,
            date_to=date_to,
            solde_ouverture=opening,
            solde_cloture=running,
            lines=lines,
        )


# --------------------------------------------------------------------------- #
# Tableaux de bord
# --------------------------------------------------------------------------- #


def get_dashboard_summary() -> DashboardSummary:
    balances = list_account_balances()
    with UnitOfWork() as uow:
        operations = uow.operations.list_all()
        payments = uow.payments.list_all()
        charges = uow.charges.list_all()

    summary = DashboardSummary()
    summary.total_accounts = len(balances)
    summary.active_accounts = sum(1 for b in balances if b.actif)
    summary.total_balance = sum((b.solde_actuel for b in balances), _ZERO)
    summary.total_client_due = sum(
        (abs(b.solde_actuel) for b in balances if b.type_compte == "client" and b.solde_actuel < 0),
        _ZERO,
    )
    for op in operations:
        if op.type_operation == "reception":
            summary.total_receptions += _dec(op.montant)
        elif op.type_operation == "livraison":
            summary.total_livraisons += _dec(op.montant)
            summary.total_commissions += effective_commission(op)
    summary.total_charges = sum((abs(_dec(c.montant)) for c in charges), _ZERO)
    summary.total_payments = sum((_dec(p.montant) for p in payments), _ZERO)
    return summary


def get_finance_totals(balances: Optional[List[AccountBalance]] = None) -> FinanceTotals:
    """Créances : clients au solde négatif. Dettes : fournisseurs au solde positif."""
    if balances is None:
        balances = list_account_balances()
    totals = FinanceTotals()
    for balance in balances:
        if balance.type_compte == "client" and balance.solde_actuel < 0:
            totals.total_creances += -balance.solde_actuel
        elif balance.type_compte == "fournisseur" and balance.solde_actuel > 0:
            totals.total_dettes += balance.solde_actuel
    return totals
