"""Checkout routes backed by the payment gateway."""
import json
import re
from decimal import Decimal
from typing import Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session
from data.database.connection import get_db
from data.database.catalog_models import Product, ProductSize
from famous_since.config import settings
from famous_since.payments.stripe_client import (
    PaymentGatewayError,
    StripeClient,
    get_stripe_client,
    to_subcurrency
)

router = APIRouter(prefix="/api", tags=["checkout"])

PAYMENT_INTENT_ID = re.compile(r"^pi_[A-Za-z0-9_]+$")


class CreateCustomerRequest(BaseModel):
    """Request model for creating a payment customer."""
    email: str = Field(..., min_length=3, description="Customer email")
    name: Optional[str] = Field(None, description="Customer display name")


class CreateCustomerResponse(BaseModel):
    customerId: str


class CheckoutItem(BaseModel):
    """Cart line sent by the checkout page."""
    product_id: int
    quantity: int = Field(..., ge=1)
    size: str = Field(..., min_length=1)


class PaymentIntentRequest(BaseModel):
    """Request model for creating a payment intent."""
    items: List[CheckoutItem] = Field(..., min_length=1, description="Items being purchased")
    amount: Optional[Decimal] = Field(None, description="Order total in dollars; computed from stored prices when omitted")


class PaymentIntentResponse(BaseModel):
    clientSecret: str


@router.post("/create-customer", response_model=CreateCustomerResponse, summary="Create a payment customer")
async def create_customer(
    request: CreateCustomerRequest,
    stripe: StripeClient = Depends(get_stripe_client)
):
    """Create a customer in the payment gateway and return its id."""
    try:
        customer_id = await stripe.create_customer(email=request.email, name=request.name)
    except PaymentGatewayError as e:
        print(f"[PAYMENTS] Error creating customer: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal Server Error: {e}"
        )

    return CreateCustomerResponse(customerId=customer_id)


@router.get("/verify-payment", summary="Check whether a payment intent succeeded")
async def verify_payment(
    payment_intent: Optional[str] = Query(None, description="Payment intent id returned by checkout"),
    stripe: StripeClient = Depends(get_stripe_client)
):
    """Report `success: true` only when the payment intent status is `succeeded`."""
    if not payment_intent:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "Payment intent ID is required"}
        )

    if not PAYMENT_INTENT_ID.match(payment_intent):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "Invalid payment intent ID"}
        )

    try:
        intent = await stripe.retrieve_payment_intent(payment_intent)
    except PaymentGatewayError as e:
        print(f"[PAYMENTS] Error verifying payment: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Failed to verify payment"}
        )

    return {"success": intent.get("status") == "succeeded"}


def verify_items(db: Session, items: List[CheckoutItem]) -> List[Dict]:
    """
    Check every cart line against the catalog.

    Returns the lines with stored names and prices.

    Raises:
        HTTPException: 400 when a product or size does not exist
    """
    verified = []
    for item in items:
        product = db.query(Product).filter(Product.id == item.product_id).first()
        if not product:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid product: {item.product_id}"
            )

        size = item.size.strip().upper()
        size_exists = db.query(ProductSize).filter(
            ProductSize.product_type_id == product.product_type_id,
            ProductSize.size == size
        ).first()
        if not size_exists:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Size {size} is not available for {product.name}"
            )

        verified.append({
            "product_id": product.id,
            "name": product.name,
            "description": product.description,
            "quantity": item.quantity,
            "size": size,
            "unit_price": Decimal(product.price),
            "stripe_account_id": product.stripe_account_id
        })
    return verified


def connected_account_for(verified_items: List[Dict]) -> Optional[str]:
    """
    Connected account that receives the payment, if the products have one.

    Raises:
        HTTPException: 400 when items belong to different accounts
    """
    accounts = {item["stripe_account_id"] for item in verified_items if item["stripe_account_id"]}
    if len(accounts) > 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot process items from different Stripe accounts in one transaction"
        )
    return accounts.pop() if accounts else None


def platform_fee(amount_in_cents: int) -> int:
    return int(round(amount_in_cents * settings.platform_fee_percent / 100))


def build_order_metadata(verified_items: List[Dict]) -> Dict[str, str]:
    """Flat string metadata describing the order, attached to the intent."""
    order_items = [
        {
            "product_id": item["product_id"],
            "name": item["name"],
            "description": item["description"],
            "quantity": item["quantity"],
            "size": item["size"],
            "unit_price": float(item["unit_price"])
        }
        for item in verified_items
    ]
    return {
        "order_items": json.dumps(order_items),
        "total_items": str(sum(item["quantity"] for item in verified_items)),
        "order_description": " | ".join(
            f"{item['quantity']}x {item['name']} ({item['size']}) - {item['description']}"
            for item in verified_items
        )
    }


@router.post("/create-payment-intent", response_model=PaymentIntentResponse, summary="Start a checkout payment")
async def create_payment_intent(
    request: PaymentIntentRequest,
    db: Session = Depends(get_db),
    stripe: StripeClient = Depends(get_stripe_client)
):
    """
    Create a payment intent for the cart.

    Items are verified against the catalog first. When the request does not
    carry an amount, the total is computed from stored prices. Products owned
    by a connected account are charged to it, minus the platform fee.
    """
    verified_items = verify_items(db, request.items)
    destination = connected_account_for(verified_items)

    amount = request.amount
    if not amount:
        amount = sum(item["unit_price"] * item["quantity"] for item in verified_items)
    amount_in_cents = to_subcurrency(amount)
    if amount_in_cents <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid request body - amount is required"
        )

    try:
        intent = await stripe.create_payment_intent(
            amount=amount_in_cents,
            metadata=build_order_metadata(verified_items),
            destination=destination,
            application_fee_amount=platform_fee(amount_in_cents) if destination else None
        )
    except PaymentGatewayError as e:
        print(f"[PAYMENTS] Error creating payment intent: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create payment intent"
        )

    return PaymentIntentResponse(clientSecret=intent["client_secret"])
