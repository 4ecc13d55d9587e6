"""
Package des services (logique métier) de l'application.

Les services orchestrent :
- les repositories (accès à la base) via l'UnitOfWork
- les validations et les transactions
- le calcul des soldes et de l'état du stock
- le logging structuré
"""

from .errors import (
    ServiceError,
    ValidationError,
    NotFoundError,
    AccountInUseError,
    VehicleAlreadySoldError,
    VehicleDefinitionInUseError,
    VehicleNotInStockError,
)
from .account_service import (
    list_accounts,
    get_account,
    create_account,
    quick_create_account,
    update_account,
    delete_account,
)
from .operation_service import (
    list_receptions,
    create_receptions,
    update_reception,
    delete_reception,
    list_livraisons,
    create_livraison,
    update_livraison,
    delete_livraison,
    effective_commission,
)
from .stock_service import (
    get_stock,
    compute_stock,
    sold_vins,
    list_available_models,
    list_stock_for_model,
)
from .ledger_service import (
    calculate_account_balance,
    list_account_balances,
    get_account_statement,
    get_dashboard_summary,
    get_finance_totals,
    displayed_due,
    is_debt,
)
from .payment_service import list_payments, create_payment, delete_payment, build_settlement
from .charge_service import list_charges, create_charge, delete_charge
from .journal_service import build_journal, journal_totals
from .company_service import get_company_settings, update_company_settings
from .settings_service import get_setting

__all__ = [
    # Erreurs
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "AccountInUseError",
    "VehicleAlreadySoldError",
    "VehicleDefinitionInUseError",
    "VehicleNotInStockError",
    # Comptes
    "list_accounts",
    "get_account",
    "create_account",
    "quick_create_account",
    "update_account",
    "delete_account",
    # Réceptions / livraisons
    "list_receptions",
    "create_receptions",
    "update_reception",
    "delete_reception",
    "list_livraisons",
    "create_livraison",
    "update_livraison",
    "delete_livraison",
    "effective_commission",
    # Stock
    "get_stock",
    "compute_stock",
    "sold_vins",
    "list_available_models",
    "list_stock_for_model",
    # Soldes et relevés
    "calculate_account_balance",
    "list_account_balances",
    "get_account_statement",
    "get_dashboard_summary",
    "get_finance_totals",
    "displayed_due",
    "is_debt",
    # Paiements et charges
    "list_payments",
    "create_payment",
    "delete_payment",
    "build_settlement",
    "list_charges",
    "create_charge",
    "delete_charge",
    # Journal
    "build_journal",
    "journal_totals",
    # Société / paramètres
    "get_company_settings",
    "update_company_settings",
    "get_setting",
]
