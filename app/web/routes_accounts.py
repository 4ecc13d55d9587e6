"""
Routes pour la gestion des comptes (clients, fournisseurs, internes).
"""
from __future__ import annotations

from flask import Blueprint, flash, redirect, render_template, request, url_for

from app.models import ACCOUNT_TYPES
from app.services.account_service import (
    create_account,
    delete_account,
    get_account,
    list_accounts,
    quick_create_account,
    update_account,
)
from app.services.errors import ServiceError
from app.services.ledger_service import displayed_due, is_debt, list_account_balances

accounts_bp = Blueprint("accounts", __name__)

_FORM_FIELDS = (
    "code_compte", "nom_compte", "type_compte", "solde_initial",
    "address", "n_carte_identite", "nif", "nis", "rc", "ai",
)


def _form_fields() -> dict:
    fields = {name: request.form.get(name) for name in _FORM_FIELDS}
    fields["actif"] = request.form.get("actif") in ("on", "1", "true")
    return fields


def _safe_next(default_endpoint: str) -> str:
    target = request.form.get("next") or ""
    # Seuls les chemins internes sont acceptés
    if target.startswith("/") and not target.startswith("//"):
        return target
    return url_for(default_endpoint)


@accounts_bp.route("/", methods=["GET"])
def list_view():
    search = (request.args.get("search") or "").strip()
    type_compte = request.args.get("type") or None
    accounts = list_accounts(search=search, type_compte=type_compte)
    balances = {b.account_id: b for b in list_account_balances()}
    return render_template(
        "accounts/list.html",
        accounts=accounts,
        balances=balances,
        displayed_due=displayed_due,
        is_debt=is_debt,
        account_types=ACCOUNT_TYPES,
        search=search,
        type_compte=type_compte or "",
    )


@accounts_bp.route("/create", methods=["POST"])
def create_view():
    try:
        account = create_account(**_form_fields())
        flash(f"Compte « {account.nom_compte} » créé.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
    return redirect(url_for("accounts.list_view"))


@accounts_bp.route("/quick-create", methods=["POST"])
def quick_create_view():
    """Création rapide depuis les formulaires de réception et de livraison."""
    type_compte = request.form.get("type_compte") or "client"
    try:
        account = quick_create_account(
            nom=request.form.get("nom_compte"),
            code=request.form.get("code_compte"),
            type_compte=type_compte,
        )
        flash(f"Compte « {account.nom_compte} » créé.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
    return redirect(_safe_next("accounts.list_view"))


@accounts_bp.route("/<int:account_id>/edit", methods=["GET"])
def edit_view(account_id: int):
    try:
        account = get_account(account_id)
    except ServiceError as exc:
        flash(exc.message, "warning")
        return redirect(url_for("accounts.list_view"))
    return render_template("accounts/edit.html", account=account, account_types=ACCOUNT_TYPES)


@accounts_bp.route("/<int:account_id>/update", methods=["POST"])
def update_view(account_id: int):
    try:
        update_account(account_id, **_form_fields())
        flash("Compte mis à jour.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
        return redirect(url_for("accounts.edit_view", account_id=account_id))
    return redirect(url_for("accounts.list_view"))


@accounts_bp.route("/<int:account_id>/delete", methods=["POST"])
def delete_view(account_id: int):
    try:
        delete_account(account_id)
        flash("Compte supprimé.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
    return redirect(url_for("accounts.list_view"))
