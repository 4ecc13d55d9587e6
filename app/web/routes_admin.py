"""
Console d'administration : utilisateurs et paramètres de la société.
"""
from __future__ import annotations

from flask import Blueprint, flash, redirect, render_template, request, url_for

from app.middleware.auth_stub import role_required
from app.models import USER_ROLES
from app.services.company_service import (
    DEFAULT_COMPANY_SETTINGS,
    get_company_settings,
    update_company_settings,
)
from app.services.user_service import list_users

admin_bp = Blueprint("admin", __name__)


@admin_bp.route("/", methods=["GET"])
@role_required("admin")
def index():
    return render_template(
        "admin/index.html",
        users=list_users(),
        roles=USER_ROLES,
        company=get_company_settings(),
        company_fields=tuple(DEFAULT_COMPANY_SETTINGS),
    )


@admin_bp.route("/company", methods=["POST"])
@role_required("admin")
def update_company_view():
    fields = {name: request.form.get(name) for name in DEFAULT_COMPANY_SETTINGS if name in request.form}
    update_company_settings(**fields)
    flash("Paramètres de la société enregistrés.", "success")
    return redirect(url_for("admin.index"))
