from typing import Optional

from app.models import CompanySettings
from app.repositories.base import SqlAlchemyRepository


class CompanySettingsRepository(SqlAlchemyRepository[CompanySettings]):
    def __init__(self, session):
        super().__init__(session, CompanySettings)

    def get_current(self) -> Optional[CompanySettings]:
        """La table ne contient qu'une ligne : on prend la première."""
        return self.session.query(CompanySettings).order_by(CompanySettings.id.asc()).first()
