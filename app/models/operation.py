"""
Modèle Operation (table : receptions_livraisons).

Une ligne par véhicule :
- "reception" : entrée en stock (achat auprès d'un fournisseur)
- "livraison" : sortie (vente à un client), rattachée à la réception
  par le numéro de châssis.
"""

from datetime import datetime
from decimal import Decimal

from app.extensions import db

OPERATION_TYPES = ("reception", "livraison")


class Operation(db.Model):
    __tablename__ = "receptions_livraisons"

    id = db.Column(db.Integer, primary_key=True)

    type_operation = db.Column(db.String(16), nullable=False, index=True)
    account_id = db.Column(
        db.Integer,
        db.ForeignKey("accounts.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    date_operation = db.Column(db.Date, nullable=False, index=True)
    quantite = db.Column(db.Integer, nullable=False, default=1)

    # Véhicule
    marque = db.Column(db.String(128), nullable=True)
    modele = db.Column(db.String(128), nullable=True)
    numero_chassis = db.Column(db.String(64), nullable=True, index=True)

    # Prix (par véhicule)
    prix_unitaire = db.Column(db.Numeric(15, 2), nullable=False, default=Decimal("0"))
    prix_achat = db.Column(db.Numeric(15, 2), nullable=True)  # prix de revient / base
    commission = db.Column(db.Numeric(15, 2), nullable=True)
    # quantite * prix_unitaire, recalculé à chaque enregistrement
    montant = db.Column(db.Numeric(15, 2), nullable=False, default=Decimal("0"))

    # Timestamps
    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    account = db.relationship("Account")

    @property
    def is_reception(self) -> bool:
        return self.type_operation == "reception"

    @property
    def is_livraison(self) -> bool:
        return self.type_operation == "livraison"

    @property
    def vehicle_label(self) -> str:
        return f"{self.marque or ''} {self.modele or ''}".strip()

    def compute_montant(self) -> Decimal:
        """Recalcule et affecte le montant total de la ligne."""
        quantite = Decimal(self.quantite or 0)
        self.montant = (quantite * Decimal(self.prix_unitaire or 0)).quantize(Decimal("0.01"))
        return self.montant

    def __repr__(self) -> str:
        return (
            f"<Operation id={self.id} type={self.type_operation!r} "
            f"vin={self.numero_chassis!r}>"
        )
