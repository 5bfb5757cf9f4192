"""Pytest bootstrap configuration.

Pin environment-driven settings before modules that read them are imported,
and provide an in-memory gateway implementing the GatewayClient port.
"""
import os

os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("PAYMENT__DEFAULT_CURRENCY", "EUR")

import pytest

from application.dtos.payments import GatewayOrder
from core.settings import resolve_paypal_options


def order_body(
    status: str = "APPROVED",
    *,
    order_id: str = "5O190127TN364715T",
    custom_id: str = "INV-42",
    email: str = "buyer@example.com",
    given_name: str = "Jane",
    surname: str = "Doe",
) -> dict:
    return {
        "id": order_id,
        "status": status,
        "payer": {
            "payer_id": "QYR5Z8XDVJNXQ",
            "email_address": email,
            "name": {"given_name": given_name, "surname": surname},
        },
        "purchase_units": [{"reference_id": "default", "custom_id": custom_id}],
    }


def capture_body(
    status: str = "COMPLETED",
    *,
    order_id: str = "5O190127TN364715T",
    capture_id: str = "3C679366HH908993F",
    custom_id: str = "INV-42-CAPTURED",
) -> dict:
    return {
        "id": order_id,
        "status": status,
        "purchase_units": [
            {
                "reference_id": "default",
                "payments": {
                    "captures": [
                        {"id": capture_id, "status": status, "custom_id": custom_id},
                    ],
                },
            },
        ],
    }


class StubGateway:
    provider = "stub"

    def __init__(self, order=None, capture=None, created='{"id": "5O190127TN364715T", "status": "CREATED"}'):
        self.order = order or order_body()
        self.capture = capture or capture_body()
        self.created = created
        self.calls: list[tuple[str, object]] = []
        self.closed = False

    async def create_order(self, payload):
        self.calls.append(("create", payload))
        return self.created

    async def get_order(self, order_id):
        self.calls.append(("get", order_id))
        return GatewayOrder.model_validate(self.order)

    async def capture_order(self, order_id):
        self.calls.append(("capture", order_id))
        return GatewayOrder.model_validate(self.capture)

    async def aclose(self):
        self.closed = True

    def called(self, name: str) -> list:
        return [arg for op, arg in self.calls if op == name]


@pytest.fixture
def gateway():
    return StubGateway()


@pytest.fixture
def automatic_options():
    return resolve_paypal_options({"client_id": "client-abc", "client_secret": "secret-xyz"})


@pytest.fixture
def manual_options():
    return resolve_paypal_options({
        "client_id": "client-abc",
        "client_secret": "secret-xyz",
        "capture_strategy": "manual",
    })
