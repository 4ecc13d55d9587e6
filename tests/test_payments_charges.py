from datetime import date
from decimal import Decimal

import pytest

from app.services.charge_service import create_charge, delete_charge, list_charges
from app.services.dto.filters import PaymentFilters
from app.services.errors import NotFoundError, ValidationError
from app.services.payment_service import (
    SETTLEMENT_REFERENCE,
    build_settlement,
    create_payment,
    delete_payment,
    list_payments,
)


def test_payment_amount_must_be_positive(make_account):
    account = make_account()
    for amount in ("0", "-10", "abc"):
        with pytest.raises(ValidationError):
            create_payment(account.id, date(2025, 1, 1), amount, "encaissement")


def test_payment_type_and_mode_are_checked(make_account):
    account = make_account()
    with pytest.raises(ValidationError):
        create_payment(account.id, date(2025, 1, 1), "10", "virement")
    with pytest.raises(ValidationError):
        create_payment(account.id, date(2025, 1, 1), "10", "encaissement", mode_paiement="bitcoin")


def test_payment_can_reference_an_operation(make_account, receive):
    supplier = make_account("fournisseur")
    (reception,) = receive(["P1"], account=supplier)

    payment = create_payment(
        supplier.id, date(2025, 1, 15), "1000", "decaissement", operation_id=reception.id
    )
    assert payment.operation_id == reception.id


def test_list_payments_filters(make_account):
    alpha = make_account(nom="Alpha")
    beta = make_account(nom="Beta")
    create_payment(alpha.id, date(2025, 1, 1), "10", "encaissement")
    create_payment(beta.id, date(2025, 2, 1), "20", "decaissement", reference="CHQ-42")

    assert [p.montant for p in list_payments()] == [Decimal("20"), Decimal("10")]
    only_in = list_payments(PaymentFilters(type_paiement="encaissement"))
    assert [p.account_id for p in only_in] == [alpha.id]
    assert [p.account_id for p in list_payments(PaymentFilters(search="chq"))] == [beta.id]
    after = list_payments(PaymentFilters(date_from=date(2025, 1, 15)))
    assert [p.account_id for p in after] == [beta.id]


def test_payment_filters_ignore_unknown_type():
    filters = PaymentFilters.from_query_args({"type": "nope", "date_from": "2025-01-01"})
    assert filters.type_paiement == "all"
    assert filters.date_from == date(2025, 1, 1)


def test_delete_payment(make_account):
    account = make_account()
    payment = create_payment(account.id, date(2025, 1, 1), "10", "encaissement")
    delete_payment(payment.id)
    assert list_payments() == []
    with pytest.raises(NotFoundError):
        delete_payment(payment.id)


def test_settlement_for_client_is_an_encaissement(make_account, receive, deliver):
    client = make_account("client", nom="Karim Auto")
    (reception,) = receive(["S1"], prix_unitaire="800", commission="0")
    deliver(reception, account=client)

    form = build_settlement(client.id, today=date(2025, 5, 1))

    assert form.montant == Decimal("800")
    assert form.type_paiement == "encaissement"
    assert form.mode_paiement == "especes"
    assert form.reference == SETTLEMENT_REFERENCE
    assert form.description == "Règlement total du solde pour Karim Auto"
    assert form.date_paiement == date(2025, 5, 1)


def test_settlement_for_supplier_is_a_decaissement(make_account, receive):
    supplier = make_account("fournisseur")
    receive(["S2"], account=supplier, prix_unitaire="700", commission="0")

    form = build_settlement(supplier.id)

    assert form.montant == Decimal("700")
    assert form.type_paiement == "decaissement"


def test_charges_are_listed_newest_first(make_account):
    account = make_account()
    create_charge(account.id, date(2025, 1, 1), "15,5", "Carburant")
    create_charge(account.id, date(2025, 3, 1), "30")

    charges = list_charges()
    assert [c.montant for c in charges] == [Decimal("30"), Decimal("15.50")]
    assert charges[1].description == "Carburant"


def test_charge_validation_and_delete(make_account):
    account = make_account()
    with pytest.raises(ValidationError):
        create_charge(account.id, date(2025, 1, 1), "-5")
    with pytest.raises(ValidationError):
        create_charge(999, date(2025, 1, 1), "5")

    charge = create_charge(account.id, date(2025, 1, 1), "5")
    delete_charge(charge.id)
    assert list_charges() == []
