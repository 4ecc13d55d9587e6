"""
Routes principales de l'application (accueil, tableau de bord).
"""

from flask import Blueprint, redirect, render_template, url_for

from app.middleware.auth_stub import MANAGER_ROLES, get_current_user, role_required
from app.services.ledger_service import get_dashboard_summary, get_finance_totals
from app.services.operation_service import list_livraisons, list_receptions

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def index():
    """Les opérateurs arrivent sur les réceptions, les autres sur le tableau de bord."""
    user = get_current_user()
    if user.role == "operateur":
        return redirect(url_for("receptions.list_view"))
    return redirect(url_for("main.dashboard"))


@main_bp.route("/dashboard")
@role_required(*MANAGER_ROLES)
def dashboard():
    summary = get_dashboard_summary()
    finance = get_finance_totals()
    recent_receptions = list_receptions()[:5]
    recent_livraisons = list_livraisons()[:5]
    return render_template(
        "dashboard.html",
        summary=summary,
        finance=finance,
        recent_receptions=recent_receptions,
        recent_livraisons=recent_livraisons,
    )
