"""
Modèle VehicleDefinition (table : vehicules_ref).

Catalogue marque/modèle avec un prix d'achat par défaut, utilisé pour
pré-remplir le formulaire de réception.
"""

from app.extensions import db


class VehicleDefinition(db.Model):
    __tablename__ = "vehicules_ref"
    __table_args__ = (
        db.UniqueConstraint("marque", "modele", name="uq_vehicules_ref_marque_modele"),
    )

    id = db.Column(db.Integer, primary_key=True)
    marque = db.Column(db.String(128), nullable=False, index=True)
    modele = db.Column(db.String(128), nullable=False)
    reference = db.Column(db.String(64), nullable=True)
    prix_achat_defaut = db.Column(db.Numeric(15, 2), nullable=True)

    @property
    def label(self) -> str:
        return f"{self.marque} {self.modele}"

    def __repr__(self) -> str:
        return f"<VehicleDefinition id={self.id} {self.marque!r} {self.modele!r}>"
