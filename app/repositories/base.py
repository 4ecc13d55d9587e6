"""
Generic Repository Pattern.
Fournit les opérations CRUD de base pour n'importe quel modèle SQLAlchemy.
"""
from typing import Type, TypeVar, Generic, Optional, List

from app.extensions import db

# Type générique T, qui doit être un modèle SQLAlchemy
T = TypeVar("T", bound=db.Model)


class SqlAlchemyRepository(Generic[T]):
    def __init__(self, session, model_cls: Type[T]):
        self.session = session
        self.model_cls = model_cls

    def add(self, entity: T) -> T:
        """Ajoute l'entité à la session."""
        self.session.add(entity)
        return entity

    def get_by_id(self, id: int) -> Optional[T]:
        """Récupère par clé primaire."""
        return self.session.get(self.model_cls, id)

    def list_all(self) -> List[T]:
        """Retourne tous les enregistrements."""
        return self.session.query(self.model_cls).all()

    def delete(self, entity: T) -> None:
        """Supprime l'entité."""
        self.session.delete(entity)
