from decimal import Decimal

import pytest

from domain.common.exceptions import DomainValidationException, MissingFieldError
from domain.payment.entity import Price
from domain.payment.order_builder import REQUIRED_ORDER_FIELDS, OrderRequestBuilder, format_amount


CONTEXT = {"shipping_preference": "NO_SHIPPING", "user_action": "PAY_NOW"}


def _fields(**overrides):
    fields = {
        "return_url": "https://x/ok",
        "cancel_url": "https://x/no",
        "description": "Order 42",
        "internalPaymentId": "INV-42",
    }
    fields.update(overrides)
    return fields


def test_build_example_purchase_unit():
    payload = OrderRequestBuilder(CONTEXT).build(Price(Decimal("49.99"), "EUR"), _fields())

    assert payload["intent"] == "CAPTURE"
    assert payload["purchase_units"] == [
        {
            "custom_id": "INV-42",
            "description": "Order 42",
            "amount": {"currency_code": "EUR", "value": "49.99"},
        }
    ]


def test_application_context_merges_urls_over_configured_context():
    builder = OrderRequestBuilder(CONTEXT)
    payload = builder.build(Price(Decimal("10"), "usd"), _fields())

    assert payload["application_context"] == {
        "shipping_preference": "NO_SHIPPING",
        "user_action": "PAY_NOW",
        "return_url": "https://x/ok",
        "cancel_url": "https://x/no",
    }
    # builder context itself is untouched by per-call overrides
    assert builder.application_context == CONTEXT


def test_empty_url_does_not_override_context():
    builder = OrderRequestBuilder({**CONTEXT, "return_url": "https://shop/default"})
    payload = builder.build(Price(Decimal("1"), "EUR"), _fields(return_url=""))
    assert payload["application_context"]["return_url"] == "https://shop/default"


@pytest.mark.parametrize(
    "amount, expected",
    [("10", "10.00"), ("0.5", "0.50"), ("12.345", "12.35"), ("99.994", "99.99"), (7, "7.00")],
)
def test_amount_always_has_two_decimals(amount, expected):
    payload = OrderRequestBuilder().build(Price(amount, "EUR"), _fields())
    value = payload["purchase_units"][0]["amount"]["value"]
    assert value == expected
    assert len(value.split(".")[1]) == 2


def test_build_is_deterministic():
    builder = OrderRequestBuilder(CONTEXT)
    price = Price(Decimal("49.99"), "EUR")
    assert builder.build(price, _fields()) == builder.build(price, _fields())


def test_missing_fields_are_listed_exhaustively_in_canonical_order():
    fields = _fields()
    del fields["internalPaymentId"]
    fields["return_url"] = None

    with pytest.raises(MissingFieldError) as exc_info:
        OrderRequestBuilder().build(Price(Decimal("1"), "EUR"), fields)

    assert exc_info.value.missing == ["return_url", "internalPaymentId"]
    assert "return_url, internalPaymentId" in str(exc_info.value)


def test_all_fields_missing():
    with pytest.raises(MissingFieldError) as exc_info:
        OrderRequestBuilder().build(Price(Decimal("1"), "EUR"), {"unrelated": "x"})
    assert exc_info.value.missing == list(REQUIRED_ORDER_FIELDS)
    assert exc_info.value.details == {"missing": list(REQUIRED_ORDER_FIELDS)}


def test_build_order_is_immutable():
    order = OrderRequestBuilder(CONTEXT).build_order(Price(Decimal("5"), "EUR"), _fields())
    with pytest.raises(AttributeError):
        order.description = "changed"  # type: ignore[misc]


def test_price_rejects_invalid_currency():
    with pytest.raises(DomainValidationException):
        Price(Decimal("1"), "EURO")


def test_format_amount_rounds_half_up():
    assert format_amount(Decimal("0.125")) == "0.13"


@pytest.mark.parametrize("amount", ["1E+27", "1000000000000000000", "-1E+18", "Infinity", "NaN", "abc"])
def test_price_rejects_unformattable_amount(amount):
    with pytest.raises(DomainValidationException) as exc_info:
        Price(amount, "EUR")
    assert exc_info.value.field == "gross_amount"


def test_largest_accepted_amount_still_builds():
    payload = OrderRequestBuilder().build(Price(Decimal("999999999999999999.994"), "EUR"), _fields())
    assert payload["purchase_units"][0]["amount"]["value"] == "999999999999999999.99"
