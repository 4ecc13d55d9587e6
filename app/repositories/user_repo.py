"""
Repository spécifique pour User.
"""
from typing import List, Optional

from app.models import User
from app.repositories.base import SqlAlchemyRepository


class UserRepository(SqlAlchemyRepository[User]):
    def __init__(self, session):
        super().__init__(session, User)

    def get_by_email(self, email: str) -> Optional[User]:
        if not email:
            return None
        return self.session.query(User).filter_by(email=email).first()

    def list_all_ordered(self) -> List[User]:
        return self.session.query(User).order_by(User.email.asc()).all()
