"""Tests for the Stripe REST client."""
import asyncio

import httpx
import pytest

from famous_since.payments.stripe_client import (
    PaymentGatewayError,
    StripeClient,
    _encode_params,
    to_subcurrency
)


@pytest.mark.parametrize("amount,expected", [
    (28, 2800),
    ("19.99", 1999),
    (19.99, 1999),
    (0.005, 1),
])
def test_to_subcurrency(amount, expected):
    assert to_subcurrency(amount) == expected


def test_encode_params_uses_bracket_notation():
    pairs = _encode_params({
        "amount": 100,
        "name": None,
        "automatic_payment_methods": {"enabled": True},
        "metadata": {"order": "1"},
        "expand": ["customer"]
    })

    assert pairs == [
        ("amount", "100"),
        ("automatic_payment_methods[enabled]", "true"),
        ("metadata[order]", "1"),
        ("expand[0]", "customer")
    ]


def _client(handler):
    return StripeClient(
        secret_key="sk_test_123",
        api_base="https://api.stripe.test/v1",
        api_version="2023-10-16",
        transport=httpx.MockTransport(handler)
    )


def test_requests_are_authenticated_and_versioned():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"id": "pi_1", "status": "succeeded"})

    intent = asyncio.run(_client(handler).retrieve_payment_intent("pi_1"))

    assert intent["status"] == "succeeded"
    request = seen[0]
    assert request.url.path == "/v1/payment_intents/pi_1"
    assert request.headers["Stripe-Version"] == "2023-10-16"
    assert request.headers["Authorization"].startswith("Basic ")


def test_error_response_raises_gateway_error():
    def handler(request):
        return httpx.Response(402, json={"error": {"message": "Your card was declined."}})

    with pytest.raises(PaymentGatewayError) as excinfo:
        asyncio.run(_client(handler).create_customer("fan@example.com"))

    assert excinfo.value.status_code == 402
    assert "declined" in str(excinfo.value)


def test_transport_error_raises_gateway_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(PaymentGatewayError):
        asyncio.run(_client(handler).retrieve_account())


def test_missing_secret_key_is_rejected(monkeypatch):
    from famous_since.config import settings

    monkeypatch.setattr(settings, "stripe_secret_key", "")

    with pytest.raises(ValueError):
        StripeClient()


def test_object_ids_stay_inside_their_path_segment():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"id": "acct_1"})

    asyncio.run(_client(handler).retrieve_account("acct_1/../../account"))

    raw_path = seen[0].url.raw_path
    assert raw_path.startswith(b"/v1/accounts/acct_1")
    assert raw_path.upper().count(b"%2F") == 3


def test_dot_ids_are_rejected_before_any_request():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={})

    with pytest.raises(PaymentGatewayError):
        asyncio.run(_client(handler).retrieve_payment_intent(".."))

    assert seen == []


def test_destination_charge_params():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"id": "pi_1", "client_secret": "pi_1_secret"})

    asyncio.run(_client(handler).create_payment_intent(
        amount=5000,
        destination="acct_owner",
        application_fee_amount=100
    ))

    body = seen[0].content.decode()
    assert "transfer_data%5Bdestination%5D=acct_owner" in body
    assert "application_fee_amount=100" in body
