"""
Routes du catalogue des modèles de véhicules.
"""
from __future__ import annotations

from flask import Blueprint, flash, redirect, render_template, request, url_for

from app.services.errors import ServiceError
from app.services.vehicle_service import (
    create_vehicle_definition,
    delete_vehicle_definition,
    list_vehicle_definitions,
)

vehicules_bp = Blueprint("vehicules", __name__)


@vehicules_bp.route("/", methods=["GET"])
def list_view():
    return render_template("vehicules/list.html", definitions=list_vehicle_definitions())


@vehicules_bp.route("/create", methods=["POST"])
def create_view():
    try:
        definition = create_vehicle_definition(
            marque=request.form.get("marque"),
            modele=request.form.get("modele"),
            reference=request.form.get("reference"),
            prix_achat_defaut=request.form.get("prix_achat_defaut"),
        )
        flash(f"Modèle « {definition.label} » ajouté.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
    return redirect(url_for("vehicules.list_view"))


@vehicules_bp.route("/<int:definition_id>/delete", methods=["POST"])
def delete_view(definition_id: int):
    try:
        delete_vehicle_definition(definition_id)
        flash("Modèle supprimé.", "success")
    except ServiceError as exc:
        flash(exc.message, "danger")
    return redirect(url_for("vehicules.list_view"))
