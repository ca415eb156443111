"""Storefront models: waitlist, consultations, site switches, users and the Connect account."""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.sql import func
from data.database.connection import Base


class WaitlistEntry(Base):
    """Someone who asked to be notified when the store opens."""

    __tablename__ = "waitlist"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    subscribed_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    def __repr__(self):
        return f"<WaitlistEntry(id={self.id}, email='{self.email}')>"


class Consultation(Base):
    """Consultation request. Only read here, for connectivity checks."""

    __tablename__ = "consultations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class SiteConfig(Base):
    """Boolean site switch such as `deploy_site`."""

    __tablename__ = "site_config"

    key = Column(String(100), primary_key=True)
    value = Column(Boolean, default=False, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<SiteConfig(key='{self.key}', value={self.value})>"


class User(Base):
    """Account that can sign in through the credentials login."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    role = Column(String(50), nullable=True)  # "admin" or "user"; null means regular user
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"


class StripeConnectAccount(Base):
    """The store owner's Stripe Connect account. Payments are routed to it."""

    __tablename__ = "stripe_connect_accounts"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    business_name = Column(String(255), nullable=False)
    business_type = Column(String(50), nullable=False)
    account_id = Column(String(255), unique=True, nullable=False, index=True)
    onboarding_complete = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<StripeConnectAccount(account_id='{self.account_id}', complete={self.onboarding_complete})>"
