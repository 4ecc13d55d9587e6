"""
Routes Finance : soldes par compte, créances / dettes et paiements.
"""
from __future__ import annotations

from datetime import date

from flask import Blueprint, flash, redirect, render_template, request, url_for

from app.middleware.auth_stub import MANAGER_ROLES, role_required
from app.models import PAYMENT_MODES
from app.services.account_service import list_accounts
from app.services.dto.filters import PaymentFilters
from app.services.errors import ServiceError
from app.services.ledger_service import (
    displayed_due,
    get_finance_totals,
    is_debt,
    list_account_balances,
)
from app.services.payment_service import (
    build_settlement,
    create_payment,
    delete_payment,
    list_payments,
)

finance_bp = Blueprint("finance", __name__)


def _render_overview(settlement=None):
    filters = PaymentFilters.from_query_args(request.args)
    balances = list_account_balances()
    return render_template(
        "finance/overview.html",
        balances=balances,
        totals=get_finance_totals(balances),
        payments=list_payments(filters),
        filters=filters,
        accounts=list_accounts(),
        payment_modes=PAYMENT_MODES,
        settlement=settlement,
        displayed_due=displayed_due,
        is_debt=is_debt,
        today=date.today(),
    )


@finance_bp.route("/", methods=["GET"])
@role_required(*MANAGER_ROLES)
def overview():
    return _render_overview()


@finance_bp.route("/settle/<int:account_id>", methods=["GET"])
@role_required(*MANAGER_ROLES)
def settle_view(account_id: int):
    """Pré-remplit le formulaire de paiement pour solder le compte."""
    try:
        settlement = build_settlement(account_id)
    except ServiceError as exc:
        flash(exc.message, "warning")
        return redirect(url_for("finance.overview"))
    return _render_overview(settlement=settlement)


@finance_bp.route("/payments/create", methods=["POST"])
@role_required(*MANAGER_ROLES)
def create_payment_view():
    try:
        create_payment(
            account_id=request.form.get("account_id"),
            date_paiement=request.form.get("date_paiement"),
            montant=request.form.get("montant"),
            type_paiement=request.form.get("type_paiement"),
            mode_paiement=request.form.get("mode_paiement"),
            reference=request.form.get("reference"),
            description=request.form.get("description"),
        )
        flash("Paiement enregistré.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
    return redirect(url_for("finance.overview"))


@finance_bp.route("/payments/<int:payment_id>/delete", methods=["POST"])
@role_required(*MANAGER_ROLES)
def delete_payment_view(payment_id: int):
    try:
        delete_payment(payment_id)
        flash("Paiement supprimé.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
    return redirect(url_for("finance.overview"))
