"""
Route du journal général.
"""

from flask import Blueprint, render_template, request

from app.middleware.auth_stub import MANAGER_ROLES, role_required
from app.services.account_service import list_accounts
from app.services.dto.filters import JOURNAL_FILTER_TYPES, JournalFilters
from app.services.journal_service import build_journal, journal_totals

journal_bp = Blueprint("journal", __name__)


@journal_bp.route("/", methods=["GET"])
@role_required(*MANAGER_ROLES)
def view():
    filters = JournalFilters.from_query_args(request.args)
    entries = build_journal(filters)
    return render_template(
        "journal/view.html",
        entries=entries,
        totals=journal_totals(entries),
        filters=filters,
        accounts=list_accounts(),
        entry_types=JOURNAL_FILTER_TYPES,
    )
