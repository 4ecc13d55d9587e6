"""
Middleware d'authentification fictive (stub).

Objectif :
- Fournir un utilisateur courant fictif à chaque requête, accessible via
  `flask.g.current_user` et dans les templates Jinja comme `current_user`.
- Le rôle vient de la configuration (STUB_USER_EMAIL / STUB_USER_ROLE) et
  pilote la navigation ainsi que l'accès aux pages réservées.

Il n'y a pas de connexion réelle : ce module pourra être remplacé par un
vrai système d'authentification (Flask-Login, SSO, ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Dict, List, Optional, Tuple

from flask import Flask, abort, current_app, g

from app.models import USER_ROLES, DEFAULT_ROLE

MANAGER_ROLES = ("manager", "admin")
OPERATOR_ROLES = ("operateur", "manager", "admin")


@dataclass
class CurrentUserStub:
    """
    Utilisateur fictif.

    - id : identifiant interne (fictif)
    - email : adresse affichée dans l'en-tête
    - role : admin, manager, operateur ; toute autre valeur vaut "viewer"
    """

    id: int
    email: str
    role: str = DEFAULT_ROLE

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_manager(self) -> bool:
        return self.role in MANAGER_ROLES

    @property
    def is_operator(self) -> bool:
        return self.role in OPERATOR_ROLES

    def has_role(self, roles: Tuple[str, ...]) -> bool:
        return not roles or self.role in roles


# (endpoint, libellé, rôles autorisés ; vide = tout le monde)
NAV_ITEMS: List[Tuple[str, str, Tuple[str, ...]]] = [
    ("main.dashboard", "Tableau de bord", MANAGER_ROLES),
    ("accounts.list_view", "Comptes", ()),
    ("receptions.list_view", "Réceptions", ()),
    ("livraisons.list_view", "Livraisons", ()),
    ("stock.list_view", "Stock", ()),
    ("vehicules.list_view", "Véhicules", ()),
    ("charges.list_view", "Charges", MANAGER_ROLES),
    ("finance.overview", "Finance", MANAGER_ROLES),
    ("statements.view", "Relevés", MANAGER_ROLES),
    ("journal.view", "Journal", MANAGER_ROLES),
    ("admin.index", "Admin", ("admin",)),
]


def visible_nav_items(user: Optional[CurrentUserStub]) -> List[Dict[str, str]]:
    if user is None:
        return []
    return [
        {"endpoint": endpoint, "label": label}
        for endpoint, label, roles in NAV_ITEMS
        if user.has_role(roles)
    ]


def build_stub_user() -> CurrentUserStub:
    role = (current_app.config.get("STUB_USER_ROLE") or "").strip().lower()
    if role not in USER_ROLES:
        role = DEFAULT_ROLE
    return CurrentUserStub(
        id=1,
        email=current_app.config.get("STUB_USER_EMAIL", "admin@vms.dz"),
        role=role,
    )


def get_current_user() -> CurrentUserStub:
    user = getattr(g, "current_user", None)
    if user is None:
        user = build_stub_user()
        g.current_user = user
    return user


def role_required(*roles: str):
    """Réserve une vue aux rôles donnés ; sinon 403."""

    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            if not get_current_user().has_role(roles):
                abort(403)
            return view(*args, **kwargs)

        return wrapped

    return decorator


def init_auth_stub(app: Flask) -> None:
    """
    Enregistre les hooks d'authentification fictive sur l'app Flask.

    - before_request : positionne g.current_user
    - context_processor : expose current_user et la navigation aux templates
    """

    @app.before_request
    def inject_current_user_stub() -> None:
        g.current_user = build_stub_user()

    @app.context_processor
    def inject_user_into_templates():
        user: Optional[CurrentUserStub] = getattr(g, "current_user", None)
        return {"current_user": user, "nav_items": visible_nav_items(user)}
