"""
Package des modèles SQLAlchemy.

Les soldes, relevés et l'état du stock ne sont pas des entités :
ils sont dérivés à la volée par les services.
"""

from .account import Account, ACCOUNT_TYPES
from .operation import Operation, OPERATION_TYPES
from .payment import Payment, PAYMENT_TYPES, PAYMENT_MODES
from .charge import Charge
from .company_settings import CompanySettings
from .vehicle_definition import VehicleDefinition
from .user import User, USER_ROLES, DEFAULT_ROLE

__all__ = [
    "Account",
    "Operation",
    "Payment",
    "Charge",
    "CompanySettings",
    "VehicleDefinition",
    "User",
    "ACCOUNT_TYPES",
    "OPERATION_TYPES",
    "PAYMENT_TYPES",
    "PAYMENT_MODES",
    "USER_ROLES",
    "DEFAULT_ROLE",
]
