from datetime import date
from decimal import Decimal

import pytest

from app.services.account_service import (
    create_account,
    delete_account,
    get_account,
    list_accounts,
    quick_create_account,
    update_account,
)
from app.services.errors import (
    AccountInUseError,
    NotFoundError,
    ValidationError,
    VehicleDefinitionInUseError,
)
from app.services.payment_service import create_payment
from app.services.vehicle_service import (
    create_vehicle_definition,
    delete_vehicle_definition,
    list_vehicle_definitions,
)


def test_create_account_parses_french_amount(app):
    account = create_account(
        code_compte="CL01", nom_compte="Client Un", type_compte="client", solde_initial="1 500,50"
    )
    assert account.solde_initial == Decimal("1500.50")
    assert account.actif is True


def test_account_code_is_unique(make_account):
    make_account(code="DUP")
    with pytest.raises(ValidationError):
        make_account(code="DUP")


def test_invalid_account_type_is_rejected(app):
    with pytest.raises(ValidationError):
        create_account(code_compte="X1", nom_compte="X", type_compte="banque")


def test_quick_create_starts_at_zero(app):
    account = quick_create_account("Garage Nord", "GN01", "fournisseur")
    assert account.type_compte == "fournisseur"
    assert account.solde_initial == Decimal("0")


def test_search_by_name_code_or_nif(make_account):
    make_account(nom="Sahara Auto", code="SA01", nif="099912345")
    make_account(nom="Autre", code="AU01", type_compte="fournisseur")

    assert [a.code_compte for a in list_accounts("sahara")] == ["SA01"]
    assert [a.code_compte for a in list_accounts("au01")] == ["AU01"]
    assert [a.code_compte for a in list_accounts("0999")] == ["SA01"]
    assert [a.code_compte for a in list_accounts(type_compte="fournisseur")] == ["AU01"]


def test_update_account(make_account):
    account = make_account(nom="Ancien", code="UP01")
    update_account(account.id, code_compte="UP01", nom_compte="Nouveau", type_compte="client")
    assert get_account(account.id).nom_compte == "Nouveau"


def test_delete_unused_account(make_account):
    account = make_account()
    delete_account(account.id)
    with pytest.raises(NotFoundError):
        get_account(account.id)


def test_delete_referenced_account_is_refused(make_account):
    account = make_account()
    create_payment(account.id, date(2025, 1, 1), "10", "encaissement")

    with pytest.raises(AccountInUseError) as excinfo:
        delete_account(account.id)

    assert "Impossible de supprimer ce compte" in excinfo.value.message
    assert get_account(account.id).code_compte == account.code_compte


def test_vehicle_catalogue(app):
    create_vehicle_definition("Toyota", "Yaris", prix_achat_defaut="900000")
    create_vehicle_definition("renault", "Clio")

    labels = [(d.marque, d.modele) for d in list_vehicle_definitions()]
    assert ("renault", "Clio") in labels
    assert len(labels) == 2

    with pytest.raises(ValidationError):
        create_vehicle_definition("Toyota", "Yaris")


def test_vehicle_definition_in_use_cannot_be_deleted(receive):
    definition = create_vehicle_definition("Toyota", "Yaris")
    receive(["VD1"], marque="Toyota", modele="Yaris")

    with pytest.raises(VehicleDefinitionInUseError):
        delete_vehicle_definition(definition.id)


def test_unused_vehicle_definition_can_be_deleted(app):
    definition = create_vehicle_definition("Kia", "Picanto")
    delete_vehicle_definition(definition.id)
    assert list_vehicle_definitions() == []
