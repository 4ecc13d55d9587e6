"""
API JSON de consultation : soldes, relevés, tableau de bord et stock.

Toutes les réponses suivent le format :
{
  "success": bool,
  "message": str,
  "payload": ...
}
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from decimal import Decimal
from typing import Any

from flask import Blueprint, jsonify, request

from app.middleware.auth_stub import get_current_user
from app.services.dto.filters import OperationFilters
from app.services.errors import NotFoundError
from app.services.ledger_service import (
    displayed_due,
    get_account_balance,
    get_account_statement,
    get_dashboard_summary,
    list_account_balances,
)
from app.services.stock_service import get_stock

api_accounts_bp = Blueprint("api_accounts", __name__)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _ok(payload: Any, message: str = ""):
    return jsonify({"success": True, "message": message, "payload": _jsonable(payload)})


def _fail(message: str, status: int):
    return jsonify({"success": False, "message": message, "payload": None}), status


def _balance_payload(balance) -> dict:
    data = asdict(balance)
    data["montant_du"] = displayed_due(balance)
    return data


@api_accounts_bp.route("/accounts/balances", methods=["GET"])
def api_account_balances():
    return _ok([_balance_payload(b) for b in list_account_balances()])


@api_accounts_bp.route("/accounts/<int:account_id>/balance", methods=["GET"])
def api_account_balance(account_id: int):
    try:
        balance = get_account_balance(account_id)
    except NotFoundError as exc:
        return _fail(exc.message, 404)
    return _ok(_balance_payload(balance))


@api_accounts_bp.route("/accounts/<int:account_id>/statement", methods=["GET"])
def api_account_statement(account_id: int):
    period = OperationFilters.from_query_args(request.args)
    try:
        statement = get_account_statement(account_id, period.date_from, period.date_to)
    except NotFoundError as exc:
        return _fail(exc.message, 404)

    payload = {
        "account_id": statement.account.id,
        "code_compte": statement.account.code_compte,
        "nom_compte": statement.account.nom_compte,
        "date_from": statement.date_from,
        "date_to": statement.date_to,
        "solde_ouverture": statement.solde_ouverture,
        "solde_cloture": statement.solde_cloture,
        "lines": [asdict(line) for line in statement.lines],
    }
    return _ok(payload)


@api_accounts_bp.route("/dashboard/summary", methods=["GET"])
def api_dashboard_summary():
    return _ok(asdict(get_dashboard_summary()))


@api_accounts_bp.route("/stock", methods=["GET"])
def api_stock():
    summary = get_stock(request.args.get("search"))
    show_prices = get_current_user().is_manager
    items = []
    for op in summary.items:
        item = {
            "id": op.id,
            "marque": op.marque,
            "modele": op.modele,
            "numero_chassis": op.numero_chassis,
            "date_operation": op.date_operation,
            "fournisseur": op.account.nom_compte if op.account else None,
        }
        if show_prices:
            item["prix_achat"] = op.prix_achat
            item["montant"] = op.montant
        items.append(item)

    payload = {"count": summary.count, "items": items}
    if show_prices:
        payload["total_value"] = summary.total_value
    return _ok(payload)
