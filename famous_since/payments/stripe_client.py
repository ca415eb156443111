"""Thin async client for the Stripe REST API."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import quote
import httpx
from famous_since.config import settings

Amount = Union[int, float, Decimal, str]


class PaymentGatewayError(Exception):
    """Raised when Stripe cannot be reached or rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def to_subcurrency(amount: Amount, factor: int = 100) -> int:
    """Convert a major-unit amount (dollars) to integer minor units (cents)."""
    cents = Decimal(str(amount)) * factor
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _encode_params(params: Dict[str, Any], prefix: str = "") -> List[Tuple[str, str]]:
    """Flatten nested params into Stripe's bracketed form encoding."""
    pairs = []
    for key, value in params.items():
        name = f"{prefix}[{key}]" if prefix else key
        if value is None:
            continue
        if isinstance(value, dict):
            pairs.extend(_encode_params(value, name))
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                if isinstance(item, dict):
                    pairs.extend(_encode_params(item, f"{name}[{index}]"))
                else:
                    pairs.append((f"{name}[{index}]", str(item)))
        elif isinstance(value, bool):
            pairs.append((name, "true" if value else "false"))
        else:
            pairs.append((name, str(value)))
    return pairs


def _path_id(object_id: str) -> str:
    """Escape an object id for use as a single URL path segment."""
    if object_id in ("", ".", ".."):
        raise PaymentGatewayError(f"Invalid Stripe object id: {object_id!r}")
    return quote(object_id, safe="")


class StripeClient:
    """
    Payment gateway boundary.

    Each call opens a short-lived httpx.AsyncClient; nothing is retried.
    A custom transport can be passed for tests.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        api_base: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.secret_key = secret_key or settings.stripe_secret_key
        if not self.secret_key:
            raise ValueError("STRIPE_SECRET_KEY is not defined in the environment variables")
        self.api_base = (api_base or settings.stripe_api_base).rstrip("/")
        self.api_version = api_version or settings.stripe_api_version
        self.timeout = timeout if timeout is not None else settings.stripe_timeout
        self.transport = transport

    async def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {"Stripe-Version": self.api_version}
        data = dict(_encode_params(params)) if params else None

        try:
            async with httpx.AsyncClient(
                base_url=self.api_base,
                auth=(self.secret_key, ""),
                timeout=self.timeout,
                transport=self.transport
            ) as client:
                if method == "GET":
                    response = await client.request(method, path, params=data, headers=headers)
                else:
                    response = await client.request(method, path, data=data, headers=headers)
        except httpx.HTTPError as e:
            raise PaymentGatewayError(f"Stripe request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.status_code >= 400:
            error = payload.get("error", {}) if isinstance(payload, dict) else {}
            message = error.get("message") or f"Stripe returned HTTP {response.status_code}"
            raise PaymentGatewayError(message, status_code=response.status_code)

        return payload

    async def create_customer(self, email: str, name: Optional[str] = None) -> str:
        """Create a customer and return its id."""
        customer = await self._request("POST", "/customers", {"email": email, "name": name})
        return customer["id"]

    async def retrieve_payment_intent(self, payment_intent_id: str) -> Dict[str, Any]:
        """Fetch a payment intent. `status == "succeeded"` means the charge completed."""
        return await self._request("GET", f"/payment_intents/{_path_id(payment_intent_id)}")

    async def create_payment_intent(
        self,
        amount: int,
        currency: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
        destination: Optional[str] = None,
        application_fee_amount: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Create a payment intent with automatic payment methods.

        Args:
            amount: Amount in minor units (cents)
            currency: ISO currency code (defaults to settings.currency)
            metadata: Flat string metadata attached to the intent
            destination: Connected account that receives the funds
            application_fee_amount: Platform fee in cents, only sent with a destination

        Returns:
            The payment intent object, including `client_secret`
        """
        params = {
            "amount": amount,
            "currency": currency or settings.currency,
            "automatic_payment_methods": {"enabled": True},
            "metadata": metadata or {}
        }
        if destination:
            params["transfer_data"] = {"destination": destination}
            params["application_fee_amount"] = application_fee_amount
        return await self._request("POST", "/payment_intents", params)

    async def retrieve_account(self, account_id: Optional[str] = None) -> Dict[str, Any]:
        """Fetch a connected account, or the platform account when no id is given."""
        if account_id:
            return await self._request("GET", f"/accounts/{_path_id(account_id)}")
        return await self._request("GET", "/account")

    async def create_account(self, email: str, business_name: str, business_type: str) -> Dict[str, Any]:
        """Create a standard Connect account for the store owner."""
        params = {
            "type": "standard",
            "email": email,
            "business_type": business_type,
            "business_profile": {"name": business_name}
        }
        return await self._request("POST", "/accounts", params)

    async def list_accounts(self, limit: int = 100) -> List[Dict[str, Any]]:
        """Connected accounts of the platform, newest first."""
        accounts = await self._request("GET", "/accounts", {"limit": limit})
        return accounts.get("data", [])

    async def delete_account(self, account_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/accounts/{_path_id(account_id)}")

    async def create_account_link(self, account_id: str, refresh_url: str, return_url: str) -> str:
        """Create an onboarding link for a Connect account and return its URL."""
        link = await self._request("POST", "/account_links", {
            "account": account_id,
            "refresh_url": refresh_url,
            "return_url": return_url,
            "type": "account_onboarding"
        })
        return link["url"]



def get_stripe_client() -> StripeClient:
    """Dependency for the payment gateway client."""
    return StripeClient()
