"""
API JSON de gestion des utilisateurs.

GET  /api/admin/list-users
    {"users": [{"id", "email", "role", "last_sign_in"}, ...]}

POST /api/admin/create-user   {"email", "password", "role"}
    201 {"user": {...}} ; 400 champ manquant ou rôle invalide ; 409 email existant

POST /api/admin/update-user   {"userId", "role"}
    200 {"user": {...}} ; 400 champ manquant ou rôle invalide ; 404 utilisateur inconnu

Les erreurs sont renvoyées sous la forme {"error": "..."}.
"""

from __future__ import annotations

import logging
from functools import wraps

from flask import Blueprint, jsonify, request

from app.middleware.auth_stub import get_current_user
from app.services.errors import NotFoundError, ValidationError
from app.services.user_service import (
    EmailAlreadyExistsError,
    create_user,
    list_users,
    serialize_user,
    update_user_role,
)

logger = logging.getLogger(__name__)

api_admin_bp = Blueprint("api_admin", __name__)


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def admin_only(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not get_current_user().is_admin:
            return _error("Accès réservé aux administrateurs.", 403)
        return view(*args, **kwargs)

    return wrapped


@api_admin_bp.route("/list-users", methods=["GET"])
@admin_only
def api_list_users():
    return jsonify({"users": [serialize_user(u) for u in list_users()]})


@api_admin_bp.route("/create-user", methods=["POST"])
@admin_only
def api_create_user():
    data = request.get_json(silent=True) or {}
    try:
        user = create_user(data.get("email"), data.get("password"), data.get("role"))
    except ValidationError as exc:
        return _error(exc.message, 400)
    except EmailAlreadyExistsError as exc:
        return _error(exc.message, 409)
    return jsonify({"user": serialize_user(user)}), 201


@api_admin_bp.route("/update-user", methods=["POST"])
@admin_only
def api_update_user():
    data = request.get_json(silent=True) or {}
    try:
        user = update_user_role(data.get("userId"), data.get("role"))
    except ValidationError as exc:
        return _error(exc.message, 400)
    except NotFoundError as exc:
        return _error(exc.message, 404)
    return jsonify({"user": serialize_user(user)}), 200
