from datetime import date

import pytest

from app import create_app
from app.extensions import db
from config import TestConfig


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_account(app):
    from app.services.account_service import create_account

    counter = {"n": 0}

    def _make(type_compte="client", nom=None, code=None, solde_initial="0", **extra):
        counter["n"] += 1
        n = counter["n"]
        return create_account(
            code_compte=code or f"C{n:03d}",
            nom_compte=nom or f"Compte {n}",
            type_compte=type_compte,
            solde_initial=solde_initial,
            **extra,
        )

    return _make


@pytest.fixture
def receive(app, make_account):
    """Réceptionne un lot de châssis et renvoie les opérations créées."""
    from app.services.operation_service import create_receptions

    def _receive(
        vins,
        account=None,
        prix_unitaire="1000000",
        commission="50000",
        day=date(2025, 1, 10),
        marque="Toyota",
        modele="Yaris",
    ):
        supplier = account or make_account("fournisseur")
        return create_receptions(
            supplier.id, day, marque, modele, vins, prix_unitaire, commission
        )

    return _receive


@pytest.fixture
def deliver(app, make_account):
    from app.services.operation_service import create_livraison

    def _deliver(reception, account=None, day=date(2025, 2, 1), **prices):
        customer = account or make_account("client")
        return create_livraison(customer.id, day, reception.id, **prices)

    return _deliver
