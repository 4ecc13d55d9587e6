from datetime import date

import pytest

from app.services.payment_service import create_payment


@pytest.fixture
def seeded(make_account, receive, deliver):
    supplier = make_account("fournisseur", nom="Fournisseur Web")
    customer = make_account("client", nom="Client Web")
    first, second = receive(["WEB1", "WEB2"], account=supplier)
    livraison = deliver(first, account=customer)
    create_payment(customer.id, date(2025, 2, 2), "1000", "encaissement")
    return {"supplier": supplier, "customer": customer, "livraison": livraison}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200


def test_home_redirects_by_role(app, client):
    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard")

    app.config["STUB_USER_ROLE"] = "operateur"
    resp = client.get("/")
    assert resp.headers["Location"].endswith("/receptions/")


@pytest.mark.parametrize(
    "url",
    [
        "/dashboard",
        "/accounts/",
        "/accounts/?search=web&type=client",
        "/receptions/",
        "/livraisons/",
        "/livraisons/?model=Toyota%20Yaris",
        "/stock/",
        "/vehicules/",
        "/charges/",
        "/finance/",
        "/statements/",
        "/journal/",
        "/journal/?type=paiement",
        "/admin/",
    ],
)
def test_pages_render_for_admin(client, seeded, url):
    assert client.get(url).status_code == 200


def test_statement_page_and_exports(client, seeded):
    account_id = seeded["customer"].id

    page = client.get(f"/statements/?account_id={account_id}")
    assert page.status_code == 200
    assert "Client Web" in page.get_data(as_text=True)

    csv_resp = client.get(f"/statements/export/csv?account_id={account_id}")
    assert csv_resp.status_code == 200
    assert csv_resp.get_data(as_text=True).startswith("Date;Type;Description;Montant;Solde")

    pdf_resp = client.get(f"/statements/export/pdf?account_id={account_id}")
    assert pdf_resp.mimetype == "application/pdf"
    assert pdf_resp.data.startswith(b"%PDF")


def test_delivery_note_download(client, seeded):
    resp = client.get(f"/livraisons/{seeded['livraison'].id}/bon-de-livraison")
    assert resp.status_code == 200
    assert resp.data.startswith(b"%PDF")
    assert 'filename="BL_Toyota_WEB1.pdf"' in resp.headers["Content-Disposition"]


@pytest.mark.parametrize("url", ["/dashboard", "/finance/", "/charges/", "/journal/", "/admin/"])
def test_operator_is_forbidden_on_manager_pages(app, client, url):
    app.config["STUB_USER_ROLE"] = "operateur"
    assert client.get(url).status_code == 403


def test_operator_does_not_see_stock_value(app, client, seeded):
    app.config["STUB_USER_ROLE"] = "operateur"
    resp = client.get("/stock/")
    assert resp.status_code == 200
    assert "Valeur du stock" not in resp.get_data(as_text=True)


def test_deleting_used_account_shows_message(client, seeded):
    resp = client.post(
        f"/accounts/{seeded['customer'].id}/delete", follow_redirects=True
    )
    assert resp.status_code == 200
    assert "Impossible de supprimer ce compte" in resp.get_data(as_text=True)


def test_reception_form_creates_one_row_per_vin(client, make_account):
    supplier = make_account("fournisseur")
    resp = client.post(
        "/receptions/create",
        data={
            "account_id": str(supplier.id),
            "date_operation": "2025-04-01",
            "marque": "Kia",
            "modele": "Picanto",
            "vins": "KIA1\nKIA2",
            "prix_unitaire": "1 200 000",
            "commission": "0",
        },
    )
    assert resp.status_code == 302

    page = client.get("/stock/?search=picanto").get_data(as_text=True)
    assert "KIA1" in page and "KIA2" in page


def test_quick_create_redirects_to_next(client):
    resp = client.post(
        "/accounts/quick-create",
        data={"nom_compte": "Rapide", "code_compte": "RAP1", "type_compte": "client", "next": "/livraisons/"},
    )
    assert resp.headers["Location"].endswith("/livraisons/")

    resp = client.post(
        "/accounts/quick-create",
        data={"nom_compte": "Autre", "code_compte": "RAP2", "next": "https://ailleurs.example"},
    )
    assert resp.headers["Location"].endswith("/accounts/")
