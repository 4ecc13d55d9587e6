"""
Catalogue des modèles de véhicules (marque / modèle / prix d'achat par défaut).
"""
from __future__ import annotations

from typing import Any, List, Optional

from app.models import VehicleDefinition
from app.services.errors import (
    NotFoundError,
    ValidationError,
    VehicleDefinitionInUseError,
)
from app.services.logging import log_structured_event
from app.services.unit_of_work import UnitOfWork
from app.services.validators import optional_text, parse_decimal, require_text


def list_vehicle_definitions() -> List[VehicleDefinition]:
    with UnitOfWork() as uow:
        return uow.vehicle_definitions.list_all_ordered()


def create_vehicle_definition(
    marque: str,
    modele: str,
    reference: Optional[str] = None,
    prix_achat_defaut: Any = None,
) -> VehicleDefinition:
    marque = require_text(marque, "Marque")
    modele = require_text(modele, "Modèle")
    with UnitOfWork() as uow:
        if uow.vehicle_definitions.get_by_model(marque, modele) is not None:
            raise ValidationError(f"Le modèle « {marque} {modele} » existe déjà.")
        definition = VehicleDefinition(
            marque=marque,
            modele=modele,
            reference=optional_text(reference),
            prix_achat_defaut=parse_decimal(
                prix_achat_defaut, "Prix d'achat par défaut", required=False
            ),
        )
        uow.vehicle_definitions.add(definition)
        uow.commit()
        log_structured_event(
            "vehicle_definition_created",
            vehicle_definition_id=definition.id,
            marque=marque,
            modele=modele,
        )
        return definition


def delete_vehicle_definition(definition_id: int) -> None:
    """Refusé tant qu'une réception utilise le même couple marque/modèle."""
    with UnitOfWork() as uow:
        definition = uow.vehicle_definitions.get_by_id(definition_id)
        if definition is None:
            raise NotFoundError("Modèle de véhicule introuvable.")
        if uow.operations.exists_reception_for_model(definition.marque, definition.modele):
            raise VehicleDefinitionInUseError()
        uow.vehicle_definitions.delete(definition)
        uow.commit()
    log_structured_event("vehicle_definition_deleted", vehicle_definition_id=definition_id)
