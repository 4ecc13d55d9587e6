"""
Routes pour les charges.
"""
from __future__ import annotations

from flask import Blueprint, flash, redirect, render_template, request, url_for

from app.middleware.auth_stub import MANAGER_ROLES, role_required
from app.services.account_service import list_accounts
from app.services.charge_service import create_charge, delete_charge, list_charges
from app.services.errors import ServiceError

charges_bp = Blueprint("charges", __name__)


@charges_bp.route("/", methods=["GET"])
@role_required(*MANAGER_ROLES)
def list_view():
    charges = list_charges()
    total = sum((c.montant for c in charges), 0)
    return render_template(
        "charges/list.html", charges=charges, total=total, accounts=list_accounts()
    )


@charges_bp.route("/create", methods=["POST"])
@role_required(*MANAGER_ROLES)
def create_view():
    try:
        create_charge(
            account_id=request.form.get("account_id"),
            date_charge=request.form.get("date_charge"),
            montant=request.form.get("montant"),
            description=request.form.get("description"),
        )
        flash("Charge enregistrée.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
    return redirect(url_for("charges.list_view"))


@charges_bp.route("/<int:charge_id>/delete", methods=["POST"])
@role_required(*MANAGER_ROLES)
def delete_view(charge_id: int):
    try:
        delete_charge(charge_id)
        flash("Charge supprimée.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
    return redirect(url_for("charges.list_view"))
