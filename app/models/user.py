"""
Modèle User (table : users).

Utilisateur de l'application géré depuis la console d'administration.
L'authentification réelle n'est pas gérée ici (voir auth_stub) : le rôle
sert au filtrage de la navigation et aux pages réservées.
"""

from datetime import datetime

from werkzeug.security import check_password_hash, generate_password_hash

from app.extensions import db

# Rôles attribuables depuis la console d'administration
USER_ROLES = ("admin", "manager", "operateur")
DEFAULT_ROLE = "viewer"


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(32), nullable=True)
    last_sign_in_at = db.Column(db.DateTime, nullable=True)

    # Timestamps
    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def effective_role(self) -> str:
        """Rôle stocké, ou "viewer" si absent ou inconnu."""
        return self.role if self.role in USER_ROLES else DEFAULT_ROLE

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role!r}>"
