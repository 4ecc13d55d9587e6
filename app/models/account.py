"""
Modèle Account (table : accounts).

Compte client, fournisseur ou interne. Le solde n'est pas stocké :
il est recalculé à chaque affichage à partir du solde initial et des
mouvements (voir ledger_service).
"""

from datetime import datetime
from decimal import Decimal

from app.extensions import db

ACCOUNT_TYPES = ("client", "fournisseur", "interne")


class Account(db.Model):
    __tablename__ = "accounts"

    id = db.Column(db.Integer, primary_key=True)

    code_compte = db.Column(db.String(32), nullable=False, unique=True, index=True)
    nom_compte = db.Column(db.String(255), nullable=False, index=True)
    # "client", "fournisseur", "interne"
    type_compte = db.Column(db.String(16), nullable=False, default="client", index=True)
    solde_initial = db.Column(db.Numeric(15, 2), nullable=False, default=Decimal("0"))
    actif = db.Column(db.Boolean, nullable=False, default=True)

    # Identifiants légaux
    address = db.Column(db.String(255), nullable=True)
    n_carte_identite = db.Column(db.String(64), nullable=True)
    nif = db.Column(db.String(32), nullable=True)  # Numéro d'identification fiscale
    nis = db.Column(db.String(32), nullable=True)  # Numéro d'identification statistique
    rc = db.Column(db.String(32), nullable=True)  # Registre du commerce
    ai = db.Column(db.String(32), nullable=True)  # Article d'imposition

    # Timestamps
    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    @property
    def is_client(self) -> bool:
        return self.type_compte == "client"

    @property
    def is_supplier(self) -> bool:
        return self.type_compte == "fournisseur"

    @property
    def label(self) -> str:
        return f"{self.nom_compte} ({self.code_compte})"

    def __repr__(self) -> str:
        return f"<Account id={self.id} code={self.code_compte!r} type={self.type_compte!r}>"
