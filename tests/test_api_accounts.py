from datetime import date

from app.services.payment_service import create_payment


def test_balances_envelope(client, make_account, receive, deliver):
    customer = make_account("client", nom="Client API")
    (reception,) = receive(["API1"], prix_unitaire="1000", commission="0")
    deliver(reception, account=customer)

    body = client.get("/api/accounts/balances").get_json()

    assert body["success"] is True
    by_name = {row["nom_compte"]: row for row in body["payload"]}
    assert by_name["Client API"]["solde_actuel"] == -1000.0
    assert by_name["Client API"]["montant_du"] == 1000.0


def test_single_balance_and_not_found(client, make_account):
    account = make_account("fournisseur", solde_initial="250")

    body = client.get(f"/api/accounts/{account.id}/balance").get_json()
    assert body["payload"]["solde_actuel"] == 250.0

    missing = client.get("/api/accounts/999/balance")
    assert missing.status_code == 404
    assert missing.get_json()["success"] is False


def test_statement_with_period(client, make_account):
    account = make_account("client")
    create_payment(account.id, date(2025, 1, 5), "10", "encaissement")
    create_payment(account.id, date(2025, 2, 5), "20", "encaissement")

    body = client.get(
        f"/api/accounts/{account.id}/statement?date_from=2025-02-01"
    ).get_json()

    payload = body["payload"]
    assert payload["solde_ouverture"] == 10.0
    assert payload["solde_cloture"] == 30.0
    assert [line["date"] for line in payload["lines"]] == ["2025-02-05"]


def test_dashboard_summary(client, receive):
    receive(["D1", "D2"], prix_unitaire="500", commission="0")

    payload = client.get("/api/dashboard/summary").get_json()["payload"]

    assert payload["total_receptions"] == 1000.0
    assert payload["total_accounts"] == 1


def test_stock_prices_hidden_from_operators(app, client, receive):
    receive(["ST1"], prix_unitaire="800", commission="50")

    manager_view = client.get("/api/stock").get_json()["payload"]
    assert manager_view["count"] == 1
    assert manager_view["total_value"] == 800.0
    assert manager_view["items"][0]["prix_achat"] == 750.0

    app.config["STUB_USER_ROLE"] = "operateur"
    operator_view = client.get("/api/stock").get_json()["payload"]
    assert operator_view["count"] == 1
    assert "total_value" not in operator_view
    assert "prix_achat" not in operator_view["items"][0]
