"""
Package repositories.
Expose les Repository d'accès aux données.
"""

from .account_repo import AccountRepository
from .operation_repo import OperationRepository
from .payment_repo import PaymentRepository
from .charge_repo import ChargeRepository
from .vehicle_definition_repo import VehicleDefinitionRepository
from .company_settings_repo import CompanySettingsRepository
from .user_repo import UserRepository

__all__ = [
    "AccountRepository",
    "OperationRepository",
    "PaymentRepository",
    "ChargeRepository",
    "VehicleDefinitionRepository",
    "CompanySettingsRepository",
    "UserRepository",
]
