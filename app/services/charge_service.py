"""Services pour les charges (frais imputés à un compte)."""
from __future__ import annotations

from typing import Any, List, Optional

from app.models import Charge
from app.services.errors import NotFoundError, ValidationError
from app.services.logging import log_structured_event
from app.services.unit_of_work import UnitOfWork
from app.services.validators import parse_date, parse_int, parse_positive_amount


def list_charges() -> List[Charge]:
    with UnitOfWork() as uow:
        return uow.charges.list_all_ordered()


def create_charge(
    account_id: Any,
    date_charge: Any,
    montant: Any,
    description: Optional[str] = None,
) -> Charge:
    """Le montant est toujours stocké en valeur absolue."""
    amount = abs(parse_positive_amount(montant, "Montant"))
    day = parse_date(date_charge, "Date")
    with UnitOfWork() as uow:
        account = uow.accounts.get_by_id(parse_int(account_id, "Compte"))
        if account is None:
            raise ValidationError("Compte introuvable.")
        charge = Charge(
            account_id=account.id,
            date_charge=day,
            montant=amount,
            description=(description or "").strip(),
        )
        uow.charges.add(charge)
        uow.commit()
        log_structured_event(
            "charge_created", charge_id=charge.id, account_id=account.id, montant=amount
        )
        return charge


def delete_charge(charge_id: int) -> None:
    with UnitOfWork() as uow:
        charge = uow.charges.get_by_id(charge_id)
        if charge is None:
            raise NotFoundError("Charge introuvable.")
        uow.charges.delete(charge)
        uow.commit()
    log_structured_event("charge_deleted", charge_id=charge_id)
