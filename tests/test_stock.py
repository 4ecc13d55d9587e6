from decimal import Decimal

from app.models import Operation
from app.services.stock_service import (
    compute_stock,
    get_stock,
    list_available_models,
    list_stock_for_model,
    sold_vins,
)


def _op(type_operation, vin, **kwargs):
    return Operation(type_operation=type_operation, numero_chassis=vin, **kwargs)


def test_sold_vins_only_counts_livraisons():
    ops = [
        _op("reception", "VIN1"),
        _op("livraison", " vin1 "),
        _op("reception", "VIN2"),
        _op("livraison", None),
    ]
    assert sold_vins(ops) == {"VIN1"}


def test_compute_stock_excludes_delivered_vins():
    r1 = _op("reception", "VIN1")
    r2 = _op("reception", "VIN2")
    ops = [r1, r2, _op("livraison", "VIN1")]
    assert compute_stock(ops) == [r2]


def test_get_stock_counts_and_values_remaining_vehicles(receive, deliver):
    first, second, third = receive(["aaa1", "aaa2", "aaa3"])
    deliver(first)

    summary = get_stock()

    vins = sorted(op.numero_chassis for op in summary.items)
    assert vins == ["AAA2", "AAA3"]
    assert summary.count == 2
    assert summary.total_value == Decimal("2000000")


def test_get_stock_search_matches_model_and_vin(receive):
    receive(["YAR1"], modele="Yaris")
    receive(["COR1"], modele="Corolla")

    assert [op.numero_chassis for op in get_stock("corolla").items] == ["COR1"]
    assert [op.numero_chassis for op in get_stock("yar1").items] == ["YAR1"]


def test_available_models_are_sorted_and_distinct(receive, deliver):
    receive(["Y1", "Y2"], marque="Toyota", modele="Yaris")
    (clio,) = receive(["R1"], marque="Renault", modele="Clio")
    receive(["R2"], marque="Renault", modele="Megane")

    assert list_available_models() == ["Renault Clio", "Renault Megane", "Toyota Yaris"]

    deliver(clio)
    assert list_available_models() == ["Renault Megane", "Toyota Yaris"]
    assert sorted(op.numero_chassis for op in list_stock_for_model("Toyota Yaris")) == ["Y1", "Y2"]


def test_reception_without_vin_is_never_in_stock():
    imported = _op("reception", None)
    blank = _op("reception", "   ")
    r1 = _op("reception", "VIN1")
    assert compute_stock([imported, blank, r1]) == [r1]
