"""
Routes pour les réceptions de véhicules (entrées en stock).
"""
from __future__ import annotations

from flask import Blueprint, flash, redirect, render_template, request, url_for

from app.services.account_service import list_accounts
from app.services.dto.filters import OperationFilters
from app.services.errors import ServiceError
from app.services.operation_service import (
    create_receptions,
    delete_reception,
    get_operation,
    list_receptions,
    parse_vin_list,
    update_reception,
)
from app.services.vehicle_service import list_vehicle_definitions

receptions_bp = Blueprint("receptions", __name__)


def _form_context() -> dict:
    return {
        "suppliers": list_accounts(type_compte="fournisseur"),
        "vehicle_definitions": list_vehicle_definitions(),
    }


@receptions_bp.route("/", methods=["GET"])
def list_view():
    filters = OperationFilters.from_query_args(request.args)
    rows = list_receptions(filters)
    return render_template(
        "receptions/list.html",
        rows=rows,
        filters=filters,
        **_form_context(),
    )


@receptions_bp.route("/create", methods=["POST"])
def create_view():
    try:
        created = create_receptions(
            account_id=request.form.get("account_id"),
            date_operation=request.form.get("date_operation"),
            marque=request.form.get("marque"),
            modele=request.form.get("modele"),
            vins=parse_vin_list(request.form.get("vins")),
            prix_unitaire=request.form.get("prix_unitaire"),
            commission=request.form.get("commission"),
        )
        flash(f"{len(created)} véhicule(s) réceptionné(s).", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
    return redirect(url_for("receptions.list_view"))


@receptions_bp.route("/<int:reception_id>/edit", methods=["GET"])
def edit_view(reception_id: int):
    try:
        reception = get_operation(reception_id)
    except ServiceError as exc:
        flash(exc.message, "warning")
        return redirect(url_for("receptions.list_view"))
    return render_template("receptions/edit.html", reception=reception, **_form_context())


@receptions_bp.route("/<int:reception_id>/update", methods=["POST"])
def update_view(reception_id: int):
    try:
        update_reception(
            reception_id,
            account_id=request.form.get("account_id"),
            date_operation=request.form.get("date_operation"),
            marque=request.form.get("marque"),
            modele=request.form.get("modele"),
            numero_chassis=request.form.get("numero_chassis"),
            prix_unitaire=request.form.get("prix_unitaire"),
            commission=request.form.get("commission"),
        )
        flash("Réception mise à jour.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
        return redirect(url_for("receptions.edit_view", reception_id=reception_id))
    return redirect(url_for("receptions.list_view"))


@receptions_bp.route("/<int:reception_id>/delete", methods=["POST"])
def delete_view(reception_id: int):
    try:
        delete_reception(reception_id)
        flash("Réception supprimée.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
    return redirect(url_for("receptions.list_view"))
