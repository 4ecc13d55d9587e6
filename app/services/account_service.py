"""
Services de gestion des comptes (clients, fournisseurs, comptes internes).
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError

from app.models import Account, ACCOUNT_TYPES
from app.services.errors import AccountInUseError, NotFoundError, ValidationError
from app.services.logging import log_structured_event
from app.services.unit_of_work import UnitOfWork
from app.services.validators import (
    optional_text,
    parse_decimal,
    require_choice,
    require_text,
)

logger = logging.getLogger(__name__)

_LEGAL_FIELDS = ("address", "n_carte_identite", "nif", "nis", "rc", "ai")

_FK_PGCODE = "23503"
_FK_MYSQL_ERRNO = 1451


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    """
    Reconnaît une violation de clé étrangère quel que soit le moteur :
    PostgreSQL (SQLSTATE 23503), MySQL (errno 1451), SQLite (message).
    """
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) == _FK_PGCODE:
        return True
    args = getattr(orig, "args", ()) or ()
    if args and args[0] == _FK_MYSQL_ERRNO:
        return True
    text = str(orig if orig is not None else exc)
    return "FOREIGN KEY constraint failed" in text or _FK_PGCODE in text


def list_accounts(search: Optional[str] = None, type_compte: Optional[str] = None) -> List[Account]:
    """Comptes triés par nom, filtrés par nom/code/NIF et type."""
    if type_compte and type_compte not in ACCOUNT_TYPES:
        type_compte = None
    with UnitOfWork() as uow:
        return uow.accounts.search((search or "").strip() or None, type_compte)


def get_account(account_id: int) -> Account:
    with UnitOfWork() as uow:
        account = uow.accounts.get_by_id(account_id)
        if account is None:
            raise NotFoundError("Compte introuvable.")
        return account


def _apply_fields(account: Account, fields: dict) -> None:
    account.code_compte = require_text(fields.get("code_compte"), "Code")
    account.nom_compte = require_text(fields.get("nom_compte"), "Nom")
    account.type_compte = require_choice(
        fields.get("type_compte") or "client", ACCOUNT_TYPES, "Type de compte"
    )
    account.solde_initial = parse_decimal(
        fields.get("solde_initial"), "Solde initial", required=False
    ) or Decimal("0")
    if "actif" in fields:
        account.actif = bool(fields.get("actif"))
    for name in _LEGAL_FIELDS:
        if name in fields:
            setattr(account, name, optional_text(fields.get(name)))


def create_account(**fields: Any) -> Account:
    """Crée un compte. Le code doit être unique."""
    with UnitOfWork() as uow:
        account = Account(actif=True)
        _apply_fields(account, fields)
        if uow.accounts.get_by_code(account.code_compte) is not None:
            raise ValidationError(f"Le code compte « {account.code_compte} » existe déjà.")
        uow.accounts.add(account)
        uow.commit()

        log_structured_event(
            "account_created",
            message="Compte créé.",
            account_id=account.id,
            code_compte=account.code_compte,
            type_compte=account.type_compte,
        )
        return account


def quick_create_account(nom: str, code: str, type_compte: str) -> Account:
    """Création rapide depuis les formulaires de réception / livraison."""
    return create_account(
        code_compte=code, nom_compte=nom, type_compte=type_compte, solde_initial=0
    )


def update_account(account_id: int, **fields: Any) -> Account:
    with UnitOfWork() as uow:
        account = uow.accounts.get_by_id(account_id)
        if account is None:
            raise NotFoundError("Compte introuvable.")
        _apply_fields(account, fields)
        existing = uow.accounts.get_by_code(account.code_compte)
        if existing is not None and existing.id != account.id:
            raise ValidationError(f"Le code compte « {account.code_compte} » existe déjà.")
        uow.commit()

        log_structured_event("account_updated", account_id=account.id)
        return account


def delete_account(account_id: int) -> None:
    """
    Supprime un compte. Si des réceptions, livraisons, paiements ou charges
    le référencent, la base refuse la suppression : l'erreur est convertie
    en AccountInUseError.
    """
    with UnitOfWork() as uow:
        account = uow.accounts.get_by_id(account_id)
        if account is None:
            raise NotFoundError("Compte introuvable.")
        code = account.code_compte
        uow.accounts.delete(account)
        try:
            uow.commit()
        except IntegrityError as exc:
            if is_foreign_key_violation(exc):
                logger.warning(
                    "Suppression refusée : compte référencé.",
                    extra={"account_id": account_id, "code_compte": code},
                )
                raise AccountInUseError() from exc
            raise

    log_structured_event("account_deleted", account_id=account_id, code_compte=code)
