"""
Modèle Payment (table : payments).

Mouvement de trésorerie sur un compte :
- "encaissement" : argent reçu (en général d'un client)
- "decaissement" : argent versé (en général à un fournisseur)
"""

from datetime import datetime

from app.extensions import db

PAYMENT_TYPES = ("encaissement", "decaissement")
PAYMENT_MODES = ("especes", "virement", "cheque", "versement")


class Payment(db.Model):
    __tablename__ = "payments"

    id = db.Column(db.Integer, primary_key=True)

    account_id = db.Column(
        db.Integer,
        db.ForeignKey("accounts.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    operation_id = db.Column(
        db.Integer,
        db.ForeignKey("receptions_livraisons.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    date_paiement = db.Column(db.Date, nullable=False, index=True)
    montant = db.Column(db.Numeric(15, 2), nullable=False)
    type_paiement = db.Column(db.String(16), nullable=False, index=True)
    mode_paiement = db.Column(db.String(32), nullable=False, default="virement")
    reference = db.Column(db.String(128), nullable=True)
    description = db.Column(db.Text, nullable=True)

    # Timestamps
    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    account = db.relationship("Account")
    operation = db.relationship("Operation")

    @property
    def is_encaissement(self) -> bool:
        return self.type_paiement == "encaissement"

    def __repr__(self) -> str:
        return (
            f"<Payment id={self.id} account_id={self.account_id} "
            f"type={self.type_paiement!r} montant={self.montant}>"
        )
