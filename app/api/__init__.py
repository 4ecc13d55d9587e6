"""
Package des API légères (JSON).

Contient :
- api_admin_bp    -> gestion des utilisateurs (console d'administration)
- api_accounts_bp -> soldes, relevés, tableau de bord et stock
"""

from .api_admin import api_admin_bp
from .api_accounts import api_accounts_bp

__all__ = [
    "api_admin_bp",
    "api_accounts_bp",
]
