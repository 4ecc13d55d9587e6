"""
Repository spécifique pour Operation (réceptions et livraisons).
"""
from typing import List, Optional

from app.models import Operation
from app.repositories.base import SqlAlchemyRepository


class OperationRepository(SqlAlchemyRepository[Operation]):
    def __init__(self, session):
        super().__init__(session, Operation)

    def list_all_ordered(self) -> List[Operation]:
        """Toutes les opérations, de la plus récente à la plus ancienne."""
        return (
            self.session.query(Operation)
            .order_by(Operation.date_operation.desc(), Operation.id.desc())
            .all()
        )

    def list_by_type(self, type_operation: str) -> List[Operation]:
        return (
            self.session.query(Operation)
            .filter(Operation.type_operation == type_operation)
            .order_by(Operation.date_operation.desc(), Operation.id.desc())
            .all()
        )

    def list_by_account(self, account_id: int) -> List[Operation]:
        return (
            self.session.query(Operation)
            .filter(Operation.account_id == account_id)
            .order_by(Operation.date_operation.asc(), Operation.id.asc())
            .all()
        )

    def find_reception_by_vin(self, vin: str) -> Optional[Operation]:
        if not vin:
            return None
        return (
            self.session.query(Operation)
            .filter_by(type_operation="reception", numero_chassis=vin)
            .first()
        )

    def find_livraison_by_vin(self, vin: str) -> Optional[Operation]:
        if not vin:
            return None
        return (
            self.session.query(Operation)
            .filter_by(type_operation="livraison", numero_chassis=vin)
            .first()
        )

    def exists_reception_for_model(self, marque: str, modele: str) -> bool:
        return (
            self.session.query(Operation.id)
            .filter_by(type_operation="reception", marque=marque, modele=modele)
            .first()
            is not None
        )
