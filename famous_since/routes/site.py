"""Site routes: config switches, share metadata and diagnostics."""
from typing import Any, List
from urllib.parse import quote
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from data.database.connection import get_db
from data.database.store_models import Consultation, SiteConfig, StripeConnectAccount
from famous_since.auth.session import SessionUser, require_admin, require_session
from famous_since.payments.stripe_client import PaymentGatewayError, StripeClient, get_stripe_client
from famous_since.utils.metadata import ShareMetadata, build_share_metadata

router = APIRouter(prefix="/api", tags=["site"])

DEPLOY_SITE_KEY = "deploy_site"


class SiteConfigItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    value: bool


class SiteConfigListResponse(BaseModel):
    data: List[SiteConfigItem]


class SiteConfigUpdate(BaseModel):
    """Toggle for a single site switch."""
    key: str = ""
    value: Any = None


class SiteConfigUpdateResponse(BaseModel):
    data: SiteConfigItem
    message: str


def is_site_deployed(db: Session) -> bool:
    """Whether the `deploy_site` switch is on. Missing row means not deployed."""
    row = db.query(SiteConfig).filter(SiteConfig.key == DEPLOY_SITE_KEY).first()
    return bool(row and row.value)


@router.get("/site-config", response_model=SiteConfigListResponse, summary="List site switches")
def get_site_config(db: Session = Depends(get_db)):
    try:
        rows = db.query(SiteConfig).order_by(SiteConfig.key).all()
    except SQLAlchemyError as e:
        print(f"[SITE] Error fetching site config: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")

    return SiteConfigListResponse(data=[SiteConfigItem.model_validate(row) for row in rows])


@router.post("/site-config", response_model=SiteConfigUpdateResponse, summary="Update a site switch")
def update_site_config(
    update: SiteConfigUpdate,
    db: Session = Depends(get_db),
    admin: SessionUser = Depends(require_admin)
):
    """Turn a switch on or off. Admins only."""
    if not update.key or not isinstance(update.value, bool):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request body")

    row = db.query(SiteConfig).filter(SiteConfig.key == update.key).first()
    if not row:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown site config key: {update.key}"
        )

    row.value = update.value
    db.commit()
    db.refresh(row)
    print(f"[SITE] {admin.email or admin.id} set {row.key}={row.value}")

    return SiteConfigUpdateResponse(
        data=SiteConfigItem.model_validate(row),
        message=f"{row.key} {'enabled' if row.value else 'disabled'} successfully"
    )


async def check_payments_ready(db: Session, stripe: StripeClient) -> bool:
    """Ready once the owner's Connect account has onboarded and can charge and pay out."""
    stored = db.query(StripeConnectAccount).order_by(StripeConnectAccount.id).first()
    if not stored or not stored.onboarding_complete:
        return False

    try:
        account = await stripe.retrieve_account(stored.account_id)
    except PaymentGatewayError as e:
        print(f"[SITE] Could not check Stripe account: {e}")
        return False

    return bool(
        account.get("charges_enabled")
        and account.get("payouts_enabled")
        and account.get("details_submitted")
    )


@router.get("/site-config/status", summary="Check whether the site can go live")
async def get_deployment_status(
    db: Session = Depends(get_db),
    user: SessionUser = Depends(require_session),
    stripe: StripeClient = Depends(get_stripe_client)
):
    deployed = is_site_deployed(db)
    payments_ready = await check_payments_ready(db, stripe)

    return {
        "deployed": deployed,
        "stripeSetup": payments_ready,
        "canDeploy": payments_ready,
        "requirements": {
            "stripe": {
                "setup": payments_ready,
                "message": "Stripe Connect account is fully configured" if payments_ready
                else "Stripe Connect account setup required"
            }
        }
    }


@router.get("/metadata/stay-famous/{description}", response_model=ShareMetadata, summary="Link preview metadata")
def get_share_metadata(description: str):
    """Metadata for a shared "Famous Since" moment."""
    # Path params arrive percent-decoded; re-encode to get the shared segment back
    return build_share_metadata(quote(description))


@router.get("/health/db", summary="Row-store connectivity check")
def check_database(db: Session = Depends(get_db)):
    """Runs a count against `consultations` to prove the row-store answers."""
    try:
        count = db.query(Consultation).count()
    except SQLAlchemyError as e:
        print(f"[DB] Connection test failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database connection failed")

    return {"status": "ok", "consultations": count}
