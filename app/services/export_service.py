"""
Exports : relevé de compte (CSV, Excel, PDF) et bon de livraison (PDF).
"""
from __future__ import annotations

import csv
import io
from datetime import date
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from werkzeug.utils import secure_filename

from app.models import Account, CompanySettings, Operation
from app.services.formatting_service import (
    format_amount,
    format_currency_safe,
    format_date,
)
from app.services.ledger_service import AccountStatement

STATEMENT_HEADERS = ["Date", "Type", "Montant", "Solde"]
STATEMENT_SHEET_TITLE = "Relevé"

TYPE_LABELS = {
    "reception": "Réception",
    "livraison": "Livraison",
    "encaissement": "Encaissement",
    "decaissement": "Décaissement",
    "charge": "Charge",
}


def statement_filename(account: Account, extension: str, today: Optional[date] = None) -> str:
    """releve_<code>_<AAAA-MM-JJ>.<ext>"""
    day = (today or date.today()).isoformat()
    return secure_filename(f"releve_{account.code_compte}_{day}.{extension}")


def delivery_note_filename(operation: Operation) -> str:
    """BL_<marque>_<chassis>.pdf, espaces remplacés par "_"."""
    return secure_filename(f"BL_{operation.marque or ''}_{operation.numero_chassis or ''}.pdf")


def _type_label(type_operation: str) -> str:
    return TYPE_LABELS.get(type_operation, type_operation)


# --------------------------------------------------------------------------- #
# Relevé
# --------------------------------------------------------------------------- #


def export_statement_csv(statement: AccountStatement) -> str:
    output = io.StringIO()
    writer = csv.writer(output, delimiter=";")
    writer.writerow(["Date", "Type", "Description", "Montant", "Solde"])
    for line in statement.lines:
        writer.writerow([
            line.date.isoformat() if line.date else "",
            _type_label(line.type_operation),
            line.description,
            format_amount(line.montant, use_grouping=False),
            format_amount(line.solde_cumule, use_grouping=False),
        ])
    csv_data = output.getvalue()
    output.close()
    return csv_data


def export_statement_xlsx(statement: AccountStatement) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = STATEMENT_SHEET_TITLE
    sheet.append(STATEMENT_HEADERS)
    for cell in sheet[1]:
        cell.font = Font(bold=True)

    for line in statement.lines:
        sheet.append([
            format_date(line.date),
            _type_label(line.type_operation),
            float(line.montant),
            float(line.solde_cumule),
        ])
    for column in ("A", "B", "C", "D"):
        sheet.column_dimensions[column].width = 18

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def export_statement_pdf(statement: AccountStatement, generated_on: Optional[date] = None) -> bytes:
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    height = A4[1]
    account = statement.account

    pdf.setTitle(f"Relevé {account.code_compte}")
    pdf.setFont("Helvetica-Bold", 16)
    pdf.drawString(20 * mm, height - 20 * mm, f"Relevé de Compte: {account.nom_compte}")
    pdf.setFont("Helvetica", 10)
    pdf.drawString(20 * mm, height - 30 * mm, f"Compte: {account.code_compte}")
    pdf.drawString(
        20 * mm, height - 36 * mm, f"Généré le: {format_date(generated_on or date.today())}"
    )
    pdf.drawString(
        20 * mm,
        height - 42 * mm,
        f"Solde d'ouverture: {format_currency_safe(statement.solde_ouverture)}",
    )

    columns = [20 * mm, 60 * mm, 110 * mm, 155 * mm]
    y = height - 55 * mm

    def draw_header(current_y: float) -> None:
        pdf.setFont("Helvetica-Bold", 9)
        for x, header in zip(columns, STATEMENT_HEADERS):
            pdf.drawString(x, current_y, header)
        pdf.line(20 * mm, current_y - 2 * mm, 190 * mm, current_y - 2 * mm)
        pdf.setFont("Helvetica", 9)

    draw_header(y)
    y -= 8 * mm
    for line in statement.lines:
        if y < 20 * mm:
            pdf.showPage()
            y = height - 20 * mm
            draw_header(y)
            y -= 8 * mm
        row = [
            format_date(line.date),
            _type_label(line.type_operation),
            format_currency_safe(line.montant),
            format_currency_safe(line.solde_cumule),
        ]
        for x, cell in zip(columns, row):
            pdf.drawString(x, y, cell)
        y -= 6 * mm

    pdf.setFont("Helvetica-Bold", 10)
    pdf.drawString(
        20 * mm, max(y - 4 * mm, 12 * mm),
        f"Solde de clôture: {format_currency_safe(statement.solde_cloture)}",
    )
    pdf.save()
    return buffer.getvalue()


# --------------------------------------------------------------------------- #
# Bon de livraison
# --------------------------------------------------------------------------- #


def render_delivery_note_pdf(
    operation: Operation,
    company: CompanySettings,
    generated_on: Optional[date] = None,
) -> bytes:
    """Bon de livraison d'un véhicule vendu, avec en-tête société et identifiants client."""
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    height = A4[1]
    top = height
    right = 195 * mm
    account = operation.account

    pdf.setTitle(f"BL {operation.numero_chassis or operation.id}")

    pdf.setFont("Helvetica-Bold", 22)
    pdf.setFillColor(colors.HexColor("#282828"))
    pdf.drawString(20 * mm, top - 20 * mm, "BON DE LIVRAISON")

    pdf.setFont("Helvetica", 10)
    pdf.setFillColor(colors.grey)
    pdf.drawString(20 * mm, top - 30 * mm, f"N° Ops: {operation.id:08d}")
    pdf.drawString(20 * mm, top - 35 * mm, f"Date: {format_date(operation.date_operation)}")

    # Société
    pdf.setFont("Helvetica-Bold", 12)
    pdf.setFillColor(colors.black)
    pdf.drawRightString(right, top - 20 * mm, company.name or "")
    pdf.setFont("Helvetica", 9)
    pdf.setFillColor(colors.grey)
    company_lines = [
        company.address or "",
        f"{company.city or ''}, {company.country or ''}",
        f"Tel: {company.phone or '-'}",
        f"Email: {company.email or '-'}",
        f"RC: {company.rc or '-'} | Capital: {company.capital or '-'}",
        f"NIF: {company.nif or '-'} | NIS: {company.nis or '-'}",
        f"AI: {company.ai or '-'}",
    ]
    for index, text in enumerate(company_lines):
        pdf.drawRightString(right, top - (26 + 5 * index) * mm, text)

    # Client
    box_top = top - 65 * mm
    pdf.setFillColor(colors.HexColor("#F5F7FA"))
    pdf.roundRect(20 * mm, box_top - 35 * mm, 170 * mm, 35 * mm, 3 * mm, stroke=0, fill=1)
    pdf.setFillColor(colors.black)
    pdf.setFont("Helvetica", 11)
    pdf.drawString(30 * mm, box_top - 8 * mm, "CLIENT:")
    pdf.setFont("Helvetica-Bold", 14)
    pdf.drawString(30 * mm, box_top - 16 * mm, account.nom_compte if account else "Client Inconnu")
    pdf.setFont("Helvetica", 10)
    pdf.setFillColor(colors.grey)
    pdf.drawString(30 * mm, box_top - 23 * mm, f"Code: {account.code_compte if account else '-'}")
    if account is not None:
        legal = [("NIF", account.nif), ("RC", account.rc), ("NIS", account.nis), ("AI", account.ai)]
        for index, (label, value) in enumerate(legal):
            if not value:
                continue
            x = (30 if index % 2 == 0 else 80) * mm
            y = box_top - (28 + 5 * (index // 2)) * mm
            pdf.drawString(x, y, f"{label}: {value}")

    # Désignation
    table_top = top - 110 * mm
    pdf.setFillColor(colors.black)
    pdf.line(20 * mm, table_top, 190 * mm, table_top)
    pdf.setFont("Helvetica-Bold", 10)
    pdf.drawString(25 * mm, table_top - 8 * mm, "DESIGNATION")
    pdf.drawString(100 * mm, table_top - 8 * mm, "VIN / CHASSIS")
    pdf.drawString(155 * mm, table_top - 8 * mm, "PRIX (DA)")
    pdf.line(20 * mm, table_top - 12 * mm, 190 * mm, table_top - 12 * mm)

    pdf.setFont("Helvetica", 11)
    pdf.drawString(25 * mm, table_top - 22 * mm, operation.vehicle_label)
    pdf.setFont("Courier", 10)
    pdf.drawString(100 * mm, table_top - 22 * mm, operation.numero_chassis or "-")
    pdf.setFont("Helvetica-Bold", 10)
    pdf.drawString(155 * mm, table_top - 22 * mm, format_currency_safe(operation.montant))
    pdf.line(20 * mm, table_top - 30 * mm, 190 * mm, table_top - 30 * mm)

    pdf.setFont("Helvetica-Bold", 14)
    pdf.drawString(90 * mm, table_top - 45 * mm, "TOTAL NET A PAYER:")
    pdf.setFillColor(colors.HexColor("#2864C8"))
    pdf.drawString(150 * mm, table_top - 45 * mm, format_currency_safe(operation.montant))

    pdf.setFont("Helvetica", 9)
    pdf.setFillColor(colors.grey)
    pdf.drawString(20 * mm, 27 * mm, "Ce document tient lieu de preuve de livraison.")
    pdf.drawString(20 * mm, 22 * mm, f"Généré le {format_date(generated_on or date.today())}")

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
