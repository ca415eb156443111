"""Waitlist routes for the coming-soon page and the admin viewer."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from data.database.connection import get_db
from data.database.store_models import WaitlistEntry
from data.database.waitlist_schema import (
    WaitlistAdminEntry,
    WaitlistAdminResponse,
    WaitlistEntryResponse,
    WaitlistSignup,
    WaitlistSignupResponse,
    WaitlistStatsResponse
)
from famous_since.auth.session import SessionUser, require_admin

router = APIRouter(prefix="/api/waitlist", tags=["waitlist"])


@router.post("", response_model=WaitlistSignupResponse, summary="Join the waitlist")
def join_waitlist(signup: WaitlistSignup, db: Session = Depends(get_db)):
    """Add an email to the waitlist. Each email can only be added once."""
    if signup.missing_fields():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="First name, last name, and email are required"
        )

    if not signup.has_valid_email():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please enter a valid email address"
        )

    existing = db.query(WaitlistEntry).filter(WaitlistEntry.email == signup.email).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This email is already on our waitlist"
        )

    entry = WaitlistEntry(
        first_name=signup.first_name,
        last_name=signup.last_name,
        email=signup.email
    )
    db.add(entry)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This email is already on our waitlist"
        )
    except SQLAlchemyError as e:
        db.rollback()
        print(f"[WAITLIST] Error inserting waitlist entry: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add to waitlist"
        )
    db.refresh(entry)

    return WaitlistSignupResponse(
        message="Successfully added to waitlist!",
        data=WaitlistEntryResponse.model_validate(entry)
    )


@router.get("", response_model=WaitlistStatsResponse, summary="Get waitlist statistics")
def get_waitlist_stats(db: Session = Depends(get_db)):
    """Public subscriber count."""
    try:
        count = db.query(WaitlistEntry).count()
    except SQLAlchemyError as e:
        print(f"[WAITLIST] Error getting waitlist count: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get waitlist count"
        )

    return WaitlistStatsResponse(
        total_subscribers=count,
        message="Waitlist statistics retrieved successfully"
    )


@router.get("/admin", response_model=WaitlistAdminResponse, summary="List waitlist entries")
def list_waitlist(
    db: Session = Depends(get_db),
    admin: SessionUser = Depends(require_admin)
):
    """All waitlist entries, most recent first. Admins only."""
    try:
        entries = db.query(WaitlistEntry).order_by(
            WaitlistEntry.subscribed_at.desc(),
            WaitlistEntry.id.desc()
        ).all()
    except SQLAlchemyError as e:
        print(f"[WAITLIST] Error fetching waitlist entries: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch waitlist entries"
        )

    return WaitlistAdminResponse(
        data=[WaitlistAdminEntry.model_validate(entry) for entry in entries],
        total=len(entries),
        message="Waitlist entries retrieved successfully"
    )
