"""
Route de consultation du stock (véhicules réceptionnés et non livrés).
"""

from flask import Blueprint, render_template, request

from app.services.stock_service import get_stock

stock_bp = Blueprint("stock", __name__)


@stock_bp.route("/", methods=["GET"])
def list_view():
    search = (request.args.get("search") or "").strip()
    summary = get_stock(search or None)
    return render_template("stock/list.html", summary=summary, search=search)
