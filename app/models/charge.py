"""Modèle Charge (table : charges)."""

from datetime import datetime

from app.extensions import db


class Charge(db.Model):
    __tablename__ = "charges"

    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(
        db.Integer,
        db.ForeignKey("accounts.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    date_charge = db.Column(db.Date, nullable=False, index=True)
    description = db.Column(db.String(255), nullable=False, default="")
    montant = db.Column(db.Numeric(15, 2), nullable=False)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    account = db.relationship("Account")

    def __repr__(self) -> str:
        return f"<Charge id={self.id} account_id={self.account_id} montant={self.montant}>"
