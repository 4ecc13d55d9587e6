from datetime import date
from decimal import Decimal

import pytest

from app.models import Operation
from app.services.dto.filters import OperationFilters
from app.services.errors import (
    ValidationError,
    VehicleAlreadySoldError,
    VehicleNotInStockError,
)
from app.services.operation_service import (
    create_receptions,
    delete_livraison,
    delete_reception,
    effective_commission,
    list_livraisons,
    list_receptions,
    parse_vin_list,
    update_livraison,
    update_reception,
)
from app.services.stock_service import get_stock


def test_reception_pricing_and_vin_normalisation(receive):
    (op,) = receive(["  vf1abc123 "], prix_unitaire="1 000 000", commission="50000")

    assert op.numero_chassis == "VF1ABC123"
    assert op.quantite == 1
    assert op.prix_unitaire == Decimal("1000000")
    assert op.commission == Decimal("50000")
    assert op.prix_achat == Decimal("950000")
    assert op.montant == Decimal("1000000")


def test_one_reception_per_vin(receive):
    created = receive(["A1", "A2", "A3"])
    assert len(created) == 3
    assert Operation.query.filter_by(type_operation="reception").count() == 3


def test_duplicate_vin_in_batch_rejects_whole_batch(receive):
    with pytest.raises(ValidationError):
        receive(["A1", "a1"])
    assert Operation.query.count() == 0


def test_already_received_vin_is_rejected(receive):
    receive(["A1"])
    with pytest.raises(ValidationError):
        receive(["B1", "A1"])
    assert Operation.query.count() == 1


def test_empty_vin_is_rejected(receive):
    with pytest.raises(ValidationError):
        receive(["A1", "   "])


def test_reception_requires_existing_account(app):
    with pytest.raises(ValidationError):
        create_receptions(999, date(2025, 1, 1), "Toyota", "Yaris", ["X1"], "100", "0")


def test_commission_cannot_exceed_price(receive):
    with pytest.raises(ValidationError):
        receive(["A1"], prix_unitaire="100", commission="200")


def test_list_receptions_flags_sold_vehicles(receive, deliver):
    first, second = receive(["S1", "S2"])
    deliver(first)

    rows = {row.operation.numero_chassis: row.is_sold for row in list_receptions()}
    assert rows == {"S1": True, "S2": False}


def test_list_receptions_filters_by_account_name_and_dates(receive, make_account):
    atlas = make_account("fournisseur", nom="Atlas Motors")
    receive(["F1"], account=atlas, day=date(2025, 1, 5))
    receive(["F2"], day=date(2025, 3, 5))

    by_name = list_receptions(OperationFilters(search="atlas"))
    assert [r.operation.numero_chassis for r in by_name] == ["F1"]

    by_date = list_receptions(OperationFilters(date_from=date(2025, 2, 1)))
    assert [r.operation.numero_chassis for r in by_date] == ["F2"]


def test_livraison_copies_vehicle_and_default_prices(receive, deliver):
    (reception,) = receive(["L1"], prix_unitaire="1000000", commission="50000")

    livraison = deliver(reception)

    assert livraison.type_operation == "livraison"
    assert (livraison.marque, livraison.modele, livraison.numero_chassis) == ("Toyota", "Yaris", "L1")
    assert livraison.prix_unitaire == Decimal("1000000")
    assert livraison.prix_achat == Decimal("950000")
    assert livraison.commission == Decimal("50000")
    assert livraison.montant == Decimal("1000000")


def test_livraison_commission_derived_from_sale_price(receive, deliver):
    (reception,) = receive(["L2"], prix_unitaire="1000000", commission="50000")

    livraison = deliver(reception, prix_unitaire="1200000")

    assert livraison.commission == Decimal("250000")
    assert effective_commission(livraison) == Decimal("250000")


def test_livraison_keeps_explicit_commission(receive, deliver):
    (reception,) = receive(["L3"])
    livraison = deliver(reception, prix_unitaire="1100000", commission="70000")
    assert livraison.commission == Decimal("70000")


def test_effective_commission_without_stored_value():
    op = Operation(
        type_operation="livraison",
        prix_unitaire=Decimal("1200"),
        prix_achat=Decimal("1000"),
        commission=None,
    )
    assert effective_commission(op) == Decimal("200")


def test_effective_commission_without_purchase_price_is_zero():
    op = Operation(
        type_operation="livraison",
        prix_unitaire=Decimal("1200"),
        prix_achat=None,
        commission=None,
    )
    assert effective_commission(op) == Decimal("0")


def test_vehicle_cannot_be_sold_twice(receive, deliver):
    (reception,) = receive(["D1"])
    deliver(reception)
    with pytest.raises(VehicleNotInStockError):
        deliver(reception)


def test_sold_reception_cannot_be_deleted(receive, deliver):
    (reception,) = receive(["D2"])
    deliver(reception)
    with pytest.raises(VehicleAlreadySoldError):
        delete_reception(reception.id)


def test_deleting_livraison_returns_vehicle_to_stock(receive, deliver):
    (reception,) = receive(["D3"])
    livraison = deliver(reception)
    assert get_stock().count == 0

    delete_livraison(livraison.id)

    assert get_stock().count == 1
    assert list_livraisons() == []


def test_update_reception_recomputes_prices(receive):
    (reception,) = receive(["U1"], prix_unitaire="1000", commission="100")

    updated = update_reception(
        reception.id,
        account_id=reception.account_id,
        date_operation="2025-01-20",
        marque="Toyota",
        modele="Yaris",
        numero_chassis="u1",
        prix_unitaire="2000",
        commission="300",
    )

    assert updated.montant == Decimal("2000")
    assert updated.prix_achat == Decimal("1700")
    assert updated.date_operation == date(2025, 1, 20)


def test_update_livraison_changes_price(receive, deliver):
    (reception,) = receive(["U2"], prix_unitaire="1000", commission="100")
    livraison = deliver(reception)

    updated = update_livraison(
        livraison.id,
        account_id=livraison.account_id,
        date_operation="2025-02-10",
        prix_unitaire="1500",
    )

    assert updated.montant == Decimal("1500")
    assert updated.commission == Decimal("600")


def test_parse_vin_list_splits_lines_and_commas():
    assert parse_vin_list("A1\nA2, A3;\n\n A4 ") == ["A1", "A2", "A3", "A4"]
