from datetime import date
from decimal import Decimal

from app.services.charge_service import create_charge
from app.services.ledger_service import (
    calculate_account_balance,
    displayed_due,
    get_account_balance,
    get_account_statement,
    get_dashboard_summary,
    get_finance_totals,
    list_account_balances,
)
from app.services.payment_service import create_payment


def test_reception_increases_supplier_balance(make_account, receive):
    supplier = make_account("fournisseur", solde_initial="100")
    receive(["R1", "R2"], account=supplier, prix_unitaire="1000", commission="0")

    assert calculate_account_balance(supplier.id) == Decimal("2100")


def test_livraison_makes_client_owe_us(make_account, receive, deliver):
    client = make_account("client")
    (reception,) = receive(["C1"], prix_unitaire="1500", commission="100")
    deliver(reception, account=client)

    balance = get_account_balance(client.id)

    assert balance.solde_actuel == Decimal("-1500")
    assert displayed_due(balance) == Decimal("1500")


def test_payments_and_charges_are_signed(make_account):
    account = make_account("fournisseur", solde_initial="1000")
    create_payment(account.id, date(2025, 1, 2), "400", "decaissement")
    create_payment(account.id, date(2025, 1, 3), "50", "encaissement")
    create_charge(account.id, date(2025, 1, 4), "25", "Transport")

    assert calculate_account_balance(account.id) == Decimal("675")


def test_settled_client_has_nothing_due(make_account, receive, deliver):
    client = make_account("client")
    (reception,) = receive(["C2"], prix_unitaire="900", commission="0")
    deliver(reception, account=client)
    create_payment(client.id, date(2025, 2, 5), "900", "encaissement")

    balance = get_account_balance(client.id)
    assert balance.solde_actuel == Decimal("0")
    assert displayed_due(balance) == Decimal("0")


def test_balances_listed_by_name_with_last_activity(make_account):
    zeta = make_account("client", nom="Zeta")
    alpha = make_account("client", nom="Alpha")
    create_payment(zeta.id, date(2025, 3, 1), "10", "encaissement")
    create_payment(zeta.id, date(2025, 4, 1), "10", "encaissement")

    balances = list_account_balances()

    assert [b.nom_compte for b in balances] == ["Alpha", "Zeta"]
    assert balances[0].derniere_operation is None
    assert balances[1].derniere_operation == date(2025, 4, 1)
    assert balances[1].total_mouvements == Decimal("20")
    assert alpha.id == balances[0].account_id


def test_statement_running_balance(make_account):
    account = make_account("fournisseur", solde_initial="100")
    create_charge(account.id, date(2025, 1, 10), "50")
    create_payment(account.id, date(2025, 1, 20), "30", "decaissement")

    statement = get_account_statement(account.id)

    assert statement.solde_ouverture == Decimal("100")
    assert [line.solde_cumule for line in statement.lines] == [Decimal("150"), Decimal("120")]
    assert statement.solde_cloture == calculate_account_balance(account.id)


def test_statement_period_carries_earlier_movements(make_account):
    account = make_account("fournisseur", solde_initial="100")
    create_charge(account.id, date(2025, 1, 10), "50")
    create_charge(account.id, date(2025, 2, 10), "20")
    create_charge(account.id, date(2025, 3, 10), "5")

    statement = get_account_statement(
        account.id, date_from=date(2025, 2, 1), date_to=date(2025, 2, 28)
    )

    assert statement.solde_ouverture == Decimal("150")
    assert len(statement.lines) == 1
    assert statement.solde_cloture == Decimal("170")


def test_dashboard_and_finance_totals(make_account, receive, deliver):
    supplier = make_account("fournisseur")
    client = make_account("client")
    first, second = receive(["T1", "T2"], account=supplier, prix_unitaire="1000", commission="100")
    deliver(first, account=client, prix_unitaire="1200")
    create_charge(supplier.id, date(2025, 2, 2), "40")
    create_payment(client.id, date(2025, 2, 3), "200", "encaissement")

    summary = get_dashboard_summary()
    assert summary.total_accounts == 2
    assert summary.active_accounts == 2
    assert summary.total_receptions == Decimal("2000")
    assert summary.total_livraisons == Decimal("1200")
    assert summary.total_commissions == Decimal("300")
    assert summary.total_charges == Decimal("40")
    assert summary.total_payments == Decimal("200")
    assert summary.total_client_due == Decimal("1000")

    totals = get_finance_totals()
    assert totals.total_creances == Decimal("1000")
    assert totals.total_dettes == Decimal("2040")
