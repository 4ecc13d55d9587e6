"""
Paramètres de la société (en-tête des documents imprimés).
La table ne contient qu'une ligne ; tant qu'elle n'existe pas, des
valeurs par défaut sont renvoyées sans être enregistrées.
"""
from __future__ import annotations

from typing import Any

from app.models import CompanySettings
from app.services.logging import log_structured_event
from app.services.unit_of_work import UnitOfWork

DEFAULT_COMPANY_SETTINGS = {
    "name": "VMS AUTOMOBILES",
    "address": "Zone Industrielle",
    "city": "Alger",
    "country": "Algérie",
    "phone": "+213 555 00 00 00",
    "email": "contact@vms.dz",
    "website": "",
    "capital": "10 000 000 DA",
    "rc": "16/00-0000000",
    "nif": "0000000000",
    "nis": "0000000000",
    "ai": "0000000000",
}

_EDITABLE_FIELDS = tuple(DEFAULT_COMPANY_SETTINGS)


def get_company_settings() -> CompanySettings:
    with UnitOfWork() as uow:
        current = uow.company_settings.get_current()
        if current is not None:
            return current
    return CompanySettings(**DEFAULT_COMPANY_SETTINGS)


def update_company_settings(**fields: Any) -> CompanySettings:
    with UnitOfWork() as uow:
        current = uow.company_settings.get_current()
        if current is None:
            current = CompanySettings(**DEFAULT_COMPANY_SETTINGS)
            uow.company_settings.add(current)
        for name in _EDITABLE_FIELDS:
            if name in fields:
                value = fields[name]
                setattr(current, name, (value or "").strip() if isinstance(value, str) else value)
        if not current.name:
            current.name = DEFAULT_COMPANY_SETTINGS["name"]
        uow.commit()
        log_structured_event("company_settings_updated", company_settings_id=current.id)
        return current
