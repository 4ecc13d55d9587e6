from datetime import date
from decimal import Decimal

from app.services.charge_service import create_charge
from app.services.dto.filters import JournalFilters
from app.services.journal_service import build_journal, journal_totals
from app.services.payment_service import create_payment


def _seed(make_account, receive, deliver):
    supplier = make_account("fournisseur", nom="Fournisseur Est")
    client = make_account("client", nom="Client Ouest")
    (reception,) = receive(
        ["J1"], account=supplier, prix_unitaire="1000", commission="100", day=date(2025, 1, 1)
    )
    deliver(reception, account=client, day=date(2025, 1, 5), prix_unitaire="1300")
    create_payment(client.id, date(2025, 1, 10), "500", "encaissement")
    create_payment(supplier.id, date(2025, 1, 12), "900", "decaissement")
    create_charge(supplier.id, date(2025, 1, 15), "60", "Transport")
    return supplier, client


def test_journal_merges_all_sources_newest_first(make_account, receive, deliver):
    _seed(make_account, receive, deliver)

    entries = build_journal()

    assert [e.original_type for e in entries] == [
        "charge", "decaissement", "encaissement", "livraison", "reception",
    ]
    assert entries[3].display_type == "Vente Véhicule"
    assert entries[3].is_credit is True
    assert entries[4].display_type == "Réception Stock"
    assert "VIN: J1" in entries[4].description


def test_journal_type_and_account_filters(make_account, receive, deliver):
    supplier, client = _seed(make_account, receive, deliver)

    payments = build_journal(JournalFilters(entry_type="paiement"))
    assert {e.original_type for e in payments} == {"encaissement", "decaissement"}

    client_entries = build_journal(JournalFilters(account_id=client.id))
    assert {e.original_type for e in client_entries} == {"livraison", "encaissement"}

    by_name = build_journal(JournalFilters(search="fournisseur est"))
    assert all(e.account_id == supplier.id for e in by_name)
    assert len(by_name) == 3


def test_journal_totals_count_commissions_on_sales_only(make_account, receive, deliver):
    _seed(make_account, receive, deliver)

    totals = journal_totals(build_journal())

    assert totals.receptions == Decimal("1000")
    assert totals.sales == Decimal("1300")
    assert totals.commissions == Decimal("400")
    assert totals.encaissements == Decimal("500")
    assert totals.decaissements == Decimal("900")
    assert totals.charges == Decimal("60")


def test_journal_filters_from_query_args():
    filters = JournalFilters.from_query_args({"type": "PAIEMENT", "account_id": "7"})
    assert filters.entry_type == "paiement"
    assert filters.account_id == 7
