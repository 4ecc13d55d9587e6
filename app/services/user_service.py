"""
Gestion des utilisateurs pour la console d'administration.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from app.models import User, USER_ROLES
from app.services.errors import NotFoundError, ServiceError, ValidationError
from app.services.logging import log_structured_event
from app.services.unit_of_work import UnitOfWork


class EmailAlreadyExistsError(ServiceError):
    default_message = "Un utilisateur avec cet email existe déjà."


def serialize_user(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "role": user.effective_role,
        "last_sign_in": user.last_sign_in_at.isoformat() if user.last_sign_in_at else None,
    }


def _validate_role(role: Optional[str]) -> str:
    if role not in USER_ROLES:
        raise ValidationError("Rôle invalide. Valeurs acceptées : admin, manager, operateur.")
    return role


def list_users() -> List[User]:
    with UnitOfWork() as uow:
        return uow.users.list_all_ordered()


def create_user(email: Optional[str], password: Optional[str], role: Optional[str]) -> User:
    email = (email or "").strip().lower()
    if not email or not password or not role:
        raise ValidationError("Champs requis manquants : email, password, role.")
    _validate_role(role)

    with UnitOfWork() as uow:
        if uow.users.get_by_email(email) is not None:
            raise EmailAlreadyExistsError()
        user = User(email=email, role=role)
        user.set_password(password)
        uow.users.add(user)
        uow.commit()
        log_structured_event("user_created", user_id=user.id, role=role)
        return user


def update_user_role(user_id: Any, role: Optional[str]) -> User:
    if user_id in (None, "") or not role:
        raise ValidationError("Champs requis manquants : userId, role.")
    _validate_role(role)
    try:
        user_pk = int(user_id)
    except (TypeError, ValueError):
        raise NotFoundError("Utilisateur introuvable.")

    with UnitOfWork() as uow:
        user = uow.users.get_by_id(user_pk)
        if user is None:
            raise NotFoundError("Utilisateur introuvable.")
        user.role = role
        uow.commit()
        log_structured_event("user_role_updated", user_id=user.id, role=role)
        return user
