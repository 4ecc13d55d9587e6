from typing import List

from app.models import Charge
from app.repositories.base import SqlAlchemyRepository


class ChargeRepository(SqlAlchemyRepository[Charge]):
    def __init__(self, session):
        super().__init__(session, Charge)

    def list_all_ordered(self) -> List[Charge]:
        """Toutes les charges, par date décroissante."""
        return (
            self.session.query(Charge)
            .order_by(Charge.date_charge.desc(), Charge.id.desc())
            .all()
        )

    def list_by_account(self, account_id: int) -> List[Charge]:
        return (
            self.session.query(Charge)
            .filter_by(account_id=account_id)
            .order_by(Charge.date_charge.asc(), Charge.id.asc())
            .all()
        )
