"""
Repository spécifique pour VehicleDefinition (catalogue).
"""
from typing import List, Optional

from app.models import VehicleDefinition
from app.repositories.base import SqlAlchemyRepository


class VehicleDefinitionRepository(SqlAlchemyRepository[VehicleDefinition]):
    def __init__(self, session):
        super().__init__(session, VehicleDefinition)

    def get_by_model(self, marque: str, modele: str) -> Optional[VehicleDefinition]:
        return (
            self.session.query(VehicleDefinition)
            .filter_by(marque=marque, modele=modele)
            .first()
        )

    def list_all_ordered(self) -> List[VehicleDefinition]:
        """Catalogue trié par marque puis modèle."""
        return (
            self.session.query(VehicleDefinition)
            .order_by(VehicleDefinition.marque.asc(), VehicleDefinition.modele.asc())
            .all()
        )
