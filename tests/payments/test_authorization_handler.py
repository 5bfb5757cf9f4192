import pytest

from application.services.authorization_handler import AuthorizationHandler, parse_callback
from application.services.capture_executor import CaptureExecutor
from domain.common.exceptions import ConfigurationError, MissingFieldError
from domain.payment.entity import AuthorizationCallback, CaptureStrategy, PaymentStatusKind

from conftest import StubGateway, order_body


def _handler(gateway, strategy, store=None):
    return AuthorizationHandler(gateway, CaptureExecutor(gateway), strategy, {} if store is None else store)


@pytest.mark.asyncio
async def test_manual_approved_order_is_authorized_without_capture():
    gateway = StubGateway()
    store = {}
    status = await _handler(gateway, CaptureStrategy.MANUAL, store).handle(
        {"orderID": "5O190127TN364715T", "payerID": "QYR5Z8XDVJNXQ"}
    )

    assert status.kind == PaymentStatusKind.AUTHORIZED
    assert status.merchant_reference == "INV-42"
    assert status.gateway_order_id == "5O190127TN364715T"
    assert status.extra == {}
    assert gateway.called("get") == ["5O190127TN364715T"]
    assert gateway.called("capture") == []

    authorized = store["5O190127TN364715T"]
    assert authorized.payer_id == "QYR5Z8XDVJNXQ"
    assert authorized.payer_email == "buyer@example.com"
    assert authorized.payer_given_name == "Jane"
    assert authorized.payer_surname == "Doe"


@pytest.mark.asyncio
async def test_manual_non_approved_order_is_cancelled():
    gateway = StubGateway(order=order_body("CREATED"))
    status = await _handler(gateway, "manual").handle({"orderID": "5O190127TN364715T", "payerID": "P"})
    assert status.kind == PaymentStatusKind.CANCELLED
    assert gateway.called("capture") == []


@pytest.mark.asyncio
async def test_automatic_strategy_chains_capture():
    gateway = StubGateway()
    status = await _handler(gateway, CaptureStrategy.AUTOMATIC).handle(
        AuthorizationCallback(order_id="5O190127TN364715T", payer_id="P")
    )

    assert status.kind == PaymentStatusKind.CLEARED
    assert status.extra == {"transactionId": "3C679366HH908993F"}
    assert status.merchant_reference == "INV-42-CAPTURED"
    assert [op for op, _ in gateway.calls] == ["get", "capture"]


@pytest.mark.asyncio
async def test_missing_callback_fields_fail_before_gateway_lookup():
    gateway = StubGateway()
    with pytest.raises(MissingFieldError) as exc_info:
        await _handler(gateway, "manual").handle({"orderID": None})
    assert exc_info.value.missing == ["orderID", "payerID"]
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_typed_callback_with_null_ids_is_rejected():
    gateway = StubGateway()
    store = {}
    with pytest.raises(MissingFieldError) as exc_info:
        await _handler(gateway, "automatic", store).handle(AuthorizationCallback(order_id=None, payer_id=None))
    assert exc_info.value.missing == ["orderID", "payerID"]
    assert gateway.calls == []
    assert store == {}


@pytest.mark.asyncio
async def test_authorized_data_comes_from_gateway_not_callback():
    gateway = StubGateway(order=order_body(email="real@example.com"))
    store = {}
    await _handler(gateway, "manual", store).handle(
        {"orderID": "O-1", "payerID": "P", "email_address": "spoofed@example.com"}
    )
    assert store["O-1"].payer_email == "real@example.com"


def test_unknown_strategy_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        _handler(StubGateway(), "deferred")


def test_parse_callback_accepts_typed_callback():
    cb = AuthorizationCallback(order_id="O", payer_id="P")
    assert parse_callback(cb) == cb
    assert parse_callback({"orderID": "O", "payerID": "P"}) == cb
