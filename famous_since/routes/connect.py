"""Stripe Connect routes: onboarding, ownership and listing of connected accounts."""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from data.database.connection import get_db
from data.database.catalog_models import Product, ProductType
from data.database.store_models import StripeConnectAccount
from famous_since.auth.session import require_admin
from famous_since.config import settings
from famous_since.payments.stripe_client import PaymentGatewayError, StripeClient, get_stripe_client

router = APIRouter(prefix="/api/stripe", tags=["stripe-connect"], dependencies=[Depends(require_admin)])


class CreateAccountRequest(BaseModel):
    email: str = ""
    business_name: str = ""
    business_type: str = ""


class AccountIdRequest(BaseModel):
    accountId: Optional[str] = Field(None, description="Stripe Connect account id")


def _onboarding_urls():
    return (
        f"{settings.site_url}/admin/stripe/refresh",
        f"{settings.site_url}/admin/stripe/return"
    )


def _account_is_complete(account: dict) -> bool:
    return bool(
        account.get("details_submitted")
        and account.get("payouts_enabled")
        and account.get("charges_enabled")
    )


def get_connect_account(db: Session) -> Optional[StripeConnectAccount]:
    """The stored owner account, if onboarding was ever started."""
    return db.query(StripeConnectAccount).order_by(StripeConnectAccount.id).first()


def _set_owner_account(db: Session, account_id: Optional[str], only_for: Optional[str] = None):
    """Point every product and product type at `account_id` (None clears it)."""
    for model in (Product, ProductType):
        query = db.query(model)
        if only_for is not None:
            query = query.filter(model.stripe_account_id == only_for)
        query.update({model.stripe_account_id: account_id}, synchronize_session=False)


@router.post("/connect/create-account", summary="Create the owner's Connect account")
async def create_account(
    request: CreateAccountRequest,
    db: Session = Depends(get_db),
    stripe: StripeClient = Depends(get_stripe_client)
):
    """Create a standard Connect account, store it, and return its onboarding link."""
    if not request.email or not request.business_name or not request.business_type:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")

    if get_connect_account(db):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Connect account already exists")

    try:
        account = await stripe.create_account(
            email=request.email,
            business_name=request.business_name,
            business_type=request.business_type
        )
    except PaymentGatewayError as e:
        print(f"[CONNECT] Error creating Connect account: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating Connect account"
        )

    db.add(StripeConnectAccount(
        email=request.email,
        business_name=request.business_name,
        business_type=request.business_type,
        account_id=account["id"],
        onboarding_complete=False
    ))
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        print(f"[CONNECT] Error storing Connect account: {e}")
        try:
            await stripe.delete_account(account["id"])
        except PaymentGatewayError as delete_error:
            print(f"[CONNECT] Error deleting Stripe account after failed insert: {delete_error}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error storing Connect account"
        )

    refresh_url, return_url = _onboarding_urls()
    try:
        url = await stripe.create_account_link(account["id"], refresh_url, return_url)
    except PaymentGatewayError as e:
        print(f"[CONNECT] Error creating account link: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating Connect account"
        )

    return {"accountId": account["id"], "url": url}


@router.post("/connect/create-account-link", summary="Resume onboarding")
async def create_account_link(
    request: AccountIdRequest,
    stripe: StripeClient = Depends(get_stripe_client)
):
    if not request.accountId:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Account ID is required")

    refresh_url, return_url = _onboarding_urls()
    try:
        url = await stripe.create_account_link(request.accountId, refresh_url, return_url)
    except PaymentGatewayError as e:
        print(f"[CONNECT] Error creating account link: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return {"url": url}


@router.get("/connect/check-status", summary="Onboarding status of the stored account")
async def check_stored_account_status(
    db: Session = Depends(get_db),
    stripe: StripeClient = Depends(get_stripe_client)
):
    """Ask Stripe how far onboarding got and remember the answer."""
    stored = get_connect_account(db)
    if not stored:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No Stripe account found")

    try:
        account = await stripe.retrieve_account(stored.account_id)
    except PaymentGatewayError as e:
        print(f"[CONNECT] Error checking account status: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    is_complete = _account_is_complete(account)
    if is_complete != stored.onboarding_complete:
        stored.onboarding_complete = is_complete
        db.commit()

    return {
        "accountId": stored.account_id,
        "isComplete": is_complete,
        "detailsSubmitted": bool(account.get("details_submitted")),
        "payoutsEnabled": bool(account.get("payouts_enabled")),
        "chargesEnabled": bool(account.get("charges_enabled"))
    }


@router.post("/connect/check-status", summary="Onboarding status of any account")
async def check_account_status(
    request: AccountIdRequest,
    stripe: StripeClient = Depends(get_stripe_client)
):
    """Status of the given account, including outstanding requirements."""
    if not request.accountId:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Account ID is required")

    try:
        account = await stripe.retrieve_account(request.accountId)
    except PaymentGatewayError as e:
        print(f"[CONNECT] Error checking account status: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    requirements = account.get("requirements") or {}
    currently_due = requirements.get("currently_due") or []

    return {
        "id": account.get("id"),
        "isComplete": _account_is_complete(account) and not currently_due,
        "detailsSubmitted": bool(account.get("details_submitted")),
        "chargesEnabled": bool(account.get("charges_enabled")),
        "payoutsEnabled": bool(account.get("payouts_enabled")),
        "requirements": {
            "currentlyDue": currently_due,
            "eventuallyDue": requirements.get("eventually_due") or [],
            "pastDue": requirements.get("past_due") or []
        }
    }


@router.post("/connect/update-owner-account", summary="Route all product payments to an account")
def update_owner_account(request: AccountIdRequest, db: Session = Depends(get_db)):
    if not request.accountId:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Account ID is required")

    stored = db.query(StripeConnectAccount).filter(
        StripeConnectAccount.account_id == request.accountId
    ).first()
    if not stored:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid Stripe Connect account")

    _set_owner_account(db, request.accountId)
    db.commit()
    print(f"[CONNECT] Products now paid out to {request.accountId}")

    return {"success": True}


@router.post("/connect/clear-owner-account", summary="Stop routing product payments to an account")
def clear_owner_account(db: Session = Depends(get_db)):
    _set_owner_account(db, None)
    db.commit()

    return {"success": True}


@router.post("/connect/delete-account", summary="Delete the owner's Connect account")
async def delete_account(
    db: Session = Depends(get_db),
    stripe: StripeClient = Depends(get_stripe_client)
):
    """Unlink products, delete the account at Stripe, then forget it locally."""
    stored = get_connect_account(db)
    if not stored:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No Stripe account found")

    _set_owner_account(db, None, only_for=stored.account_id)

    try:
        await stripe.delete_account(stored.account_id)
    except PaymentGatewayError as e:
        # Local cleanup still goes ahead
        print(f"[CONNECT] Error deleting Stripe account: {e}")

    db.delete(stored)
    db.commit()

    return {"success": True}


@router.get("/connected-accounts", summary="Connected accounts able to take payments")
async def list_connected_accounts(stripe: StripeClient = Depends(get_stripe_client)):
    try:
        accounts = await stripe.list_accounts(limit=100)
    except PaymentGatewayError as e:
        print(f"[CONNECT] Error listing connected accounts: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch connected accounts"
        )

    return [
        {
            "id": account.get("id"),
            "business_profile": {
                "name": (account.get("business_profile") or {}).get("name") or "Unnamed Account"
            },
            "charges_enabled": True,
            "payouts_enabled": True
        }
        for account in accounts
        if account.get("charges_enabled") and account.get("payouts_enabled")
    ]
