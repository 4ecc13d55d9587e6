import csv
import io
from datetime import date

from openpyxl import load_workbook

from app.services.charge_service import create_charge
from app.services.company_service import get_company_settings, update_company_settings
from app.services.export_service import (
    delivery_note_filename,
    export_statement_csv,
    export_statement_pdf,
    export_statement_xlsx,
    render_delivery_note_pdf,
    statement_filename,
)
from app.services.ledger_service import get_account_statement
from app.services.payment_service import create_payment


def _statement(make_account):
    account = make_account("fournisseur", code="F042", solde_initial="100")
    create_charge(account.id, date(2025, 1, 10), "50", "Transport")
    create_payment(account.id, date(2025, 1, 20), "30", "decaissement")
    return account, get_account_statement(account.id)


def test_statement_filename(make_account):
    account = make_account(code="C007")
    assert statement_filename(account, "csv", today=date(2025, 3, 9)) == "releve_C007_2025-03-09.csv"


def test_statement_csv(make_account):
    _, statement = _statement(make_account)

    rows = list(csv.reader(io.StringIO(export_statement_csv(statement)), delimiter=";"))

    assert rows[0] == ["Date", "Type", "Description", "Montant", "Solde"]
    assert rows[1] == ["2025-01-10", "Charge", "Transport", "50.00", "150.00"]
    assert rows[2][1] == "Décaissement"
    assert rows[2][3:] == ["-30.00", "120.00"]


def test_statement_xlsx(make_account):
    _, statement = _statement(make_account)

    workbook = load_workbook(io.BytesIO(export_statement_xlsx(statement)))
    sheet = workbook["Relevé"]

    assert [cell.value for cell in sheet[1]] == ["Date", "Type", "Montant", "Solde"]
    assert sheet.max_row == 3
    assert sheet["D3"].value == 120


def test_statement_pdf(make_account):
    _, statement = _statement(make_account)
    assert export_statement_pdf(statement, generated_on=date(2025, 2, 1)).startswith(b"%PDF")


def test_delivery_note_pdf(make_account, receive, deliver):
    client = make_account("client", nom="Client BL", nif="000111222")
    (reception,) = receive(["VNBL01"], marque="Renault", modele="Clio")
    livraison = deliver(reception, account=client)

    assert delivery_note_filename(livraison) == "BL_Renault_VNBL01.pdf"
    pdf = render_delivery_note_pdf(livraison, get_company_settings())
    assert pdf.startswith(b"%PDF")


def test_company_settings_defaults_then_upsert(app):
    assert get_company_settings().name == "VMS AUTOMOBILES"
    assert get_company_settings().id is None

    update_company_settings(name="Auto Sahel", city="Blida")
    saved = get_company_settings()
    assert saved.id is not None
    assert (saved.name, saved.city) == ("Auto Sahel", "Blida")

    update_company_settings(name="")
    assert get_company_settings().name == "VMS AUTOMOBILES"


def test_delivery_note_filename_has_no_spaces(make_account, receive, deliver):
    (reception,) = receive(["VNLR01"], marque="Land Rover", modele="Defender")
    livraison = deliver(reception)

    assert delivery_note_filename(livraison) == "BL_Land_Rover_VNLR01.pdf"
