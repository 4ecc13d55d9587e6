"""
Repository spécifique pour Payment.
Hérite des fonctions de base (add, get, list) de SqlAlchemyRepository.
"""
from typing import List

from app.models import Payment
from app.repositories.base import SqlAlchemyRepository


class PaymentRepository(SqlAlchemyRepository[Payment]):
    def __init__(self, session):
        super().__init__(session, Payment)

    def list_all_ordered(self) -> List[Payment]:
        """Tous les paiements, par date décroissante."""
        return (
            self.session.query(Payment)
            .order_by(Payment.date_paiement.desc(), Payment.id.desc())
            .all()
        )

    def list_by_account(self, account_id: int) -> List[Payment]:
        return (
            self.session.query(Payment)
            .filter_by(account_id=account_id)
            .order_by(Payment.date_paiement.asc(), Payment.id.asc())
            .all()
        )
