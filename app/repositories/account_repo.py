"""
Repository spécifique pour Account.
Hérite des fonctions de base (add, get, list) de SqlAlchemyRepository.
"""
from typing import List, Optional

from sqlalchemy import func, or_

from app.models import Account
from app.repositories.base import SqlAlchemyRepository


class AccountRepository(SqlAlchemyRepository[Account]):
    def __init__(self, session):
        super().__init__(session, Account)

    def get_by_code(self, code_compte: str) -> Optional[Account]:
        """Recherche un compte par code exact."""
        if not code_compte:
            return None
        return self.session.query(Account).filter_by(code_compte=code_compte).first()

    def list_all_ordered(self) -> List[Account]:
        """Tous les comptes, triés par nom."""
        return self.session.query(Account).order_by(Account.nom_compte.asc()).all()

    def search(self, search_term: Optional[str] = None, type_compte: Optional[str] = None) -> List[Account]:
        """Filtre par nom/code (insensible à la casse) ou NIF, et par type."""
        query = self.session.query(Account)
        if type_compte:
            query = query.filter(Account.type_compte == type_compte)
        if search_term:
            like = f"%{search_term.lower()}%"
            query = query.filter(
                or_(
                    func.lower(Account.nom_compte).like(like),
                    func.lower(Account.code_compte).like(like),
                    Account.nif.like(f"%{search_term}%"),
                )
            )
        return query.order_by(Account.nom_compte.asc()).all()
