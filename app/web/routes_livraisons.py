"""
Routes pour les livraisons (ventes de véhicules) et le bon de livraison PDF.
"""
from __future__ import annotations

from flask import Blueprint, Response, flash, redirect, render_template, request, url_for

from app.services.account_service import list_accounts
from app.services.company_service import get_company_settings
from app.services.dto.filters import OperationFilters
from app.services.errors import ServiceError
from app.services.export_service import delivery_note_filename, render_delivery_note_pdf
from app.services.operation_service import (
    create_livraison,
    delete_livraison,
    effective_commission,
    get_operation,
    list_livraisons,
    update_livraison,
)
from app.services.stock_service import list_available_models, list_stock_for_model

livraisons_bp = Blueprint("livraisons", __name__)


@livraisons_bp.route("/", methods=["GET"])
def list_view():
    filters = OperationFilters.from_query_args(request.args)
    selected_model = (request.args.get("model") or "").strip()
    return render_template(
        "livraisons/list.html",
        livraisons=list_livraisons(filters),
        filters=filters,
        clients=list_accounts(type_compte="client"),
        models=list_available_models(),
        selected_model=selected_model,
        stock_for_model=list_stock_for_model(selected_model) if selected_model else [],
        effective_commission=effective_commission,
    )


@livraisons_bp.route("/create", methods=["POST"])
def create_view():
    try:
        livraison = create_livraison(
            account_id=request.form.get("account_id"),
            date_operation=request.form.get("date_operation"),
            reception_id=request.form.get("reception_id"),
            prix_unitaire=request.form.get("prix_unitaire") or None,
            commission=request.form.get("commission") or None,
        )
        flash(f"Livraison du véhicule {livraison.numero_chassis} enregistrée.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
    return redirect(url_for("livraisons.list_view"))


@livraisons_bp.route("/<int:livraison_id>/edit", methods=["GET"])
def edit_view(livraison_id: int):
    try:
        livraison = get_operation(livraison_id)
    except ServiceError as exc:
        flash(exc.message, "warning")
        return redirect(url_for("livraisons.list_view"))
    return render_template(
        "livraisons/edit.html",
        livraison=livraison,
        clients=list_accounts(type_compte="client"),
    )


@livraisons_bp.route("/<int:livraison_id>/update", methods=["POST"])
def update_view(livraison_id: int):
    try:
        update_livraison(
            livraison_id,
            account_id=request.form.get("account_id"),
            date_operation=request.form.get("date_operation"),
            prix_unitaire=request.form.get("prix_unitaire") or None,
            commission=request.form.get("commission") or None,
        )
        flash("Livraison mise à jour.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
        return redirect(url_for("livraisons.edit_view", livraison_id=livraison_id))
    return redirect(url_for("livraisons.list_view"))


@livraisons_bp.route("/<int:livraison_id>/delete", methods=["POST"])
def delete_view(livraison_id: int):
    try:
        delete_livraison(livraison_id)
        flash("Livraison supprimée : le véhicule est de nouveau en stock.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
    return redirect(url_for("livraisons.list_view"))


@livraisons_bp.route("/<int:livraison_id>/bon-de-livraison", methods=["GET"])
def delivery_note_view(livraison_id: int):
    try:
        livraison = get_operation(livraison_id)
    except ServiceError as exc:
        flash(exc.message, "warning")
        return redirect(url_for("livraisons.list_view"))
    if not livraison.is_livraison:
        flash("Le bon de livraison ne concerne que les ventes.", "warning")
        return redirect(url_for("livraisons.list_view"))

    pdf_bytes = render_delivery_note_pdf(livraison, get_company_settings())
    filename = delivery_note_filename(livraison)
    return Response(
        pdf_bytes,
        mimetype="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
