"""
Exceptions métier levées par les services.

Chaque exception porte un message en français destiné à l'utilisateur :
les routes le publient tel quel via flash() ou dans la réponse JSON.
"""


class ServiceError(Exception):
    """Erreur métier générique."""

    default_message = "Une erreur est survenue."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    default_message = "Données invalides."


class NotFoundError(ServiceError):
    default_message = "Élément introuvable."


class AccountInUseError(ServiceError):
    default_message = (
        "Impossible de supprimer ce compte car il est lié à des opérations "
        "(Réceptions, Livraisons, Paiements)."
    )


class VehicleAlreadySoldError(ServiceError):
    default_message = "Ce véhicule a déjà été livré : la réception ne peut pas être supprimée."


class VehicleDefinitionInUseError(ServiceError):
    default_message = "Ce modèle est utilisé par des réceptions et ne peut pas être supprimé."


class VehicleNotInStockError(ServiceError):
    default_message = "Ce véhicule n'est pas disponible en stock."
