"""
Unit of Work Pattern.
Gère la transaction atomique de la base de données et l'accès aux repositories.
"""
from typing import Optional
from app.extensions import db

# Import Repositories
from app.repositories.account_repo import AccountRepository
from app.repositories.operation_repo import OperationRepository
from app.repositories.payment_repo import PaymentRepository
from app.repositories.charge_repo import ChargeRepository
from app.repositories.vehicle_definition_repo import VehicleDefinitionRepository
from app.repositories.company_settings_repo import CompanySettingsRepository
from app.repositories.user_repo import UserRepository


class UnitOfWork:
    def __init__(self):
        self.session = db.session
        self._accounts: Optional[AccountRepository] = None
        self._operations: Optional[OperationRepository] = None
        self._payments: Optional[PaymentRepository] = None
        self._charges: Optional[ChargeRepository] = None
        self._vehicle_definitions: Optional[VehicleDefinitionRepository] = None
        self._company_settings: Optional[CompanySettingsRepository] = None
        self._users: Optional[UserRepository] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.rollback()
            return False
        # Flask gère la fermeture de la session, ne pas fermer ici

    @property
    def accounts(self) -> AccountRepository:
        if self._accounts is None:
            self._accounts = AccountRepository(self.session)
        return self._accounts

    @property
    def operations(self) -> OperationRepository:
        if self._operations is None:
            self._operations = OperationRepository(self.session)
        return self._operations

    @property
    def payments(self) -> PaymentRepository:
        if self._payments is None:
            self._payments = PaymentRepository(self.session)
        return self._payments

    @property
    def charges(self) -> ChargeRepository:
        if self._charges is None:
            self._charges = ChargeRepository(self.session)
        return self._charges

    @property
    def vehicle_definitions(self) -> VehicleDefinitionRepository:
        if self._vehicle_definitions is None:
            self._vehicle_definitions = VehicleDefinitionRepository(self.session)
        return self._vehicle_definitions

    @property
    def company_settings(self) -> CompanySettingsRepository:
        if self._company_settings is None:
            self._company_settings = CompanySettingsRepository(self.session)
        return self._company_settings

    @property
    def users(self) -> UserRepository:
        if self._users is None:
            self._users = UserRepository(self.session)
        return self._users

    def commit(self):
        try:
            self.session.commit()
        except Exception:
            self.rollback()
            raise

    def rollback(self):
        self.session.rollback()
