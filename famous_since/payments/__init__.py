"""Payment gateway integration."""
from .stripe_client import StripeClient, PaymentGatewayError, get_stripe_client, to_subcurrency

__all__ = [
    "StripeClient",
    "PaymentGatewayError",
    "get_stripe_client",
    "to_subcurrency"
]
