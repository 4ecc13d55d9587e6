"""
Import d'un classeur Excel historique (comptes, journal, charges).

Feuilles reconnues :
- COMPTES / Comptes / ACCOUNTS   : code, nom, type, solde initial
- JOURNAL / Journal / OPERATIONS : date, code compte, type, -, quantité, prix unitaire
- CHARGES / Charges              : date, code compte, description, montant

La première ligne de chaque feuille est un en-tête. Une ligne invalide est
consignée dans le rapport sans interrompre l'import.
"""

from __future__ import annotations

import json
import logging
import os
import zipfile
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from app.models import ACCOUNT_TYPES, OPERATION_TYPES, Account, Charge, Operation
from app.services.logging import log_structured_event
from app.services.settings_service import get_import_report_path
from app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

ACCOUNT_SHEETS = ("COMPTES", "Comptes", "ACCOUNTS")
OPERATION_SHEETS = ("JOURNAL", "Journal", "OPERATIONS")
CHARGE_SHEETS = ("CHARGES", "Charges")


class RowError(ValueError):
    """Ligne de classeur invalide."""


@dataclass
class ImportSummary:
    accounts_imported: int = 0
    accounts_updated: int = 0
    accounts_errors: int = 0
    operations_imported: int = 0
    operations_errors: int = 0
    charges_imported: int = 0
    charges_errors: int = 0


@dataclass
class ImportReport:
    file: str
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    )
    status: str = "success"
    summary: ImportSummary = field(default_factory=ImportSummary)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# --------------------------------------------------------------------------- #
# Conversion des cellules
# --------------------------------------------------------------------------- #


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raw = _text(value)
    for fmt in ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y"):
        try:
            return datetime.strptime(raw[:10], fmt).date()
        except ValueError:
            continue
    raise RowError(f"Date invalide : {raw or '(vide)'}")


def _to_decimal(value: Any, label: str, default: str = "0") -> Decimal:
    raw = _text(value) or default
    try:
        number = Decimal(raw.replace(" ", "").replace(",", "."))
    except InvalidOperation:
        raise RowError(f"{label} invalide : {raw}")
    if not number.is_finite():
        raise RowError(f"{label} invalide : {raw}")
    return number.quantize(Decimal("0.01"))


def _find_sheet(workbook, names: Sequence[str]):
    for name in names:
        if name in workbook.sheetnames:
            return workbook[name]
    return None


def _data_rows(sheet):
    for row_number, row in enumerate(sheet.iter_rows(min_row=2, values_only=True), start=2):
        if row is None or all(value in (None, "") for value in row):
            continue
        yield row_number, row


# --------------------------------------------------------------------------- #
# Feuilles
# --------------------------------------------------------------------------- #


def _import_accounts(workbook, uow: UnitOfWork, report: ImportReport) -> None:
    sheet = _find_sheet(workbook, ACCOUNT_SHEETS)
    if sheet is None:
        report.warnings.append('Feuille "COMPTES" introuvable : import des comptes ignoré.')
        return

    for row_number, row in _data_rows(sheet):
        try:
            code = _text(_cell(row, 0))
            name = _text(_cell(row, 1))
            type_compte = (_text(_cell(row, 2)) or "client").lower()
            solde = _to_decimal(_cell(row, 3), "Solde initial")
            if not code:
                raise RowError("Code compte vide")
            if not name:
                raise RowError("Nom compte vide")
            if type_compte not in ACCOUNT_TYPES:
                raise RowError(
                    f"Type de compte invalide : {type_compte} (client, fournisseur ou interne)"
                )
        except RowError as exc:
            report.errors.append(f"Comptes - Ligne {row_number} : {exc}")
            report.summary.accounts_errors += 1
            continue

        account = uow.accounts.get_by_code(code)
        if account is None:
            uow.accounts.add(
                Account(
                    code_compte=code,
                    nom_compte=name,
                    type_compte=type_compte,
                    solde_initial=solde,
                    actif=True,
                )
            )
            report.summary.accounts_imported += 1
        else:
            account.nom_compte = name
            account.type_compte = type_compte
            account.solde_initial = solde
            account.actif = True
            report.summary.accounts_updated += 1
        # Les feuilles suivantes résolvent les codes par requête
        uow.session.flush()


def _resolve_account(uow: UnitOfWork, code: str) -> Account:
    if not code:
        raise RowError("Code compte vide")
    account = uow.accounts.get_by_code(code)
    if account is None:
        raise RowError(f"Compte introuvable pour le code : {code}")
    return account


def _import_operations(workbook, uow: UnitOfWork, report: ImportReport) -> None:
    sheet = _find_sheet(workbook, OPERATION_SHEETS)
    if sheet is None:
        report.warnings.append('Feuille "JOURNAL" introuvable : import des opérations ignoré.')
        return

    for row_number, row in _data_rows(sheet):
        try:
            day = _to_date(_cell(row, 0))
            account = _resolve_account(uow, _text(_cell(row, 1)))
            type_operation = _text(_cell(row, 2)).lower()
            if type_operation not in OPERATION_TYPES:
                raise RowError(f"Type d'opération invalide : {type_operation or '(vide)'}")
            quantite = _to_decimal(_cell(row, 4), "Quantité")
            prix = _to_decimal(_cell(row, 5), "Prix unitaire")
            if quantite <= 0 or quantite != quantite.to_integral_value():
                raise RowError(f"Quantité invalide : {quantite}")
            if prix < 0:
                raise RowError(f"Prix unitaire invalide : {prix}")
        except RowError as exc:
            report.errors.append(f"Opérations - Ligne {row_number} : {exc}")
            report.summary.operations_errors += 1
            continue

        op = Operation(
            type_operation=type_operation,
            account_id=account.id,
            date_operation=day,
            quantite=int(quantite),
            prix_unitaire=prix,
            prix_achat=prix if type_operation == "reception" else None,
        )
        op.compute_montant()
        uow.operations.add(op)
        report.summary.operations_imported += 1


def _import_charges(workbook, uow: UnitOfWork, report: ImportReport) -> None:
    sheet = _find_sheet(workbook, CHARGE_SHEETS)
    if sheet is None:
        report.warnings.append('Feuille "CHARGES" introuvable : import des charges ignoré.')
        return

    for row_number, row in _data_rows(sheet):
        try:
            day = _to_date(_cell(row, 0))
            account = _resolve_account(uow, _text(_cell(row, 1)))
            description = _text(_cell(row, 2)) or "Charge importée"
            montant = _to_decimal(_cell(row, 3), "Montant")
            if montant <= 0:
                raise RowError(f"Montant invalide : {montant}")
        except RowError as exc:
            report.errors.append(f"Charges - Ligne {row_number} : {exc}")
            report.summary.charges_errors += 1
            continue

        uow.charges.add(
            Charge(
                account_id=account.id,
                date_charge=day,
                description=description,
                montant=abs(montant),
            )
        )
        report.summary.charges_imported += 1


# --------------------------------------------------------------------------- #
# Point d'entrée
# --------------------------------------------------------------------------- #


def run_import(file_path: str) -> ImportReport:
    """
    Importe le classeur et renvoie le rapport.

    status = "error" si le fichier est absent ou illisible (rien n'est écrit),
    "partial" si au moins une ligne a été rejetée, "success" sinon.
    """
    report = ImportReport(file=str(file_path))

    if not os.path.exists(file_path):
        report.errors.append(f"Fichier introuvable : {file_path}")
        report.status = "error"
        return report

    try:
        workbook = load_workbook(file_path, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, OSError, KeyError, ValueError) as exc:
        logger.exception("Lecture du classeur impossible", extra={"file": str(file_path)})
        report.errors.append(f"Erreur de lecture du fichier Excel : {exc}")
        report.status = "error"
        return report

    try:
        with UnitOfWork() as uow:
            _import_accounts(workbook, uow, report)
            _import_operations(workbook, uow, report)
            _import_charges(workbook, uow, report)
            uow.commit()
    finally:
        workbook.close()

    if report.errors:
        report.status = "partial"

    log_structured_event(
        "workbook_import",
        message="Import du classeur terminé.",
        level="warning" if report.status != "success" else "info",
        file=str(file_path),
        status=report.status,
        **asdict(report.summary),
    )
    return report


def write_import_report(report: ImportReport, path: Optional[str] = None) -> str:
    if path is None:
        path = get_import_report_path()
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(report.to_dict(), handle, ensure_ascii=False, indent=2)
    return path
