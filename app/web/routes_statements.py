"""
Routes des relevés de compte et de leurs exports (CSV, Excel, PDF).
"""
from __future__ import annotations

from flask import Blueprint, Response, flash, redirect, render_template, request, url_for

from app.middleware.auth_stub import MANAGER_ROLES, role_required
from app.services.account_service import list_accounts
from app.services.dto.filters import OperationFilters
from app.services.errors import ServiceError
from app.services.export_service import (
    export_statement_csv,
    export_statement_pdf,
    export_statement_xlsx,
    statement_filename,
)
from app.services.ledger_service import get_account_statement

statements_bp = Blueprint("statements", __name__)

_EXPORT_MIMETYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "pdf": "application/pdf",
}


def _selected_statement():
    account_id = OperationFilters._parse_int(request.args.get("account_id"))
    period = OperationFilters.from_query_args(request.args)
    if account_id is None:
        return None, period
    return get_account_statement(account_id, period.date_from, period.date_to), period


@statements_bp.route("/", methods=["GET"])
@role_required(*MANAGER_ROLES)
def view():
    try:
        statement, period = _selected_statement()
    except ServiceError as exc:
        flash(exc.message, "warning")
        return redirect(url_for("statements.view"))
    return render_template(
        "statements/view.html",
        accounts=list_accounts(),
        statement=statement,
        period=period,
        selected_account_id=request.args.get("account_id", ""),
    )


@statements_bp.route("/export/<fmt>", methods=["GET"])
@role_required(*MANAGER_ROLES)
def export_view(fmt: str):
    if fmt not in _EXPORT_MIMETYPES:
        flash("Format d'export inconnu.", "warning")
        return redirect(url_for("statements.view"))
    try:
        statement, _ = _selected_statement()
    except ServiceError as exc:
        flash(exc.message, "warning")
        return redirect(url_for("statements.view"))
    if statement is None:
        flash("Sélectionnez un compte.", "warning")
        return redirect(url_for("statements.view"))

    if fmt == "csv":
        data = export_statement_csv(statement)
    elif fmt == "xlsx":
        data = export_statement_xlsx(statement)
    else:
        data = export_statement_pdf(statement)

    filename = statement_filename(statement.account, fmt)
    return Response(
        data,
        mimetype=_EXPORT_MIMETYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
