"""Waitlist schemas for API validation."""
import re
from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class WaitlistSignup(BaseModel):
    """Incoming waitlist signup. Accepts the storefront's camelCase keys."""
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: str = Field("")

    @field_validator('first_name', 'last_name', 'email')
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v

    def missing_fields(self) -> bool:
        return not (self.first_name and self.last_name and self.email)

    def has_valid_email(self) -> bool:
        return bool(EMAIL_PATTERN.match(self.email))


class WaitlistEntryResponse(BaseModel):
    """Waitlist row as returned to the storefront."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    subscribed_at: datetime = Field(..., alias="subscribedAt")


class WaitlistSignupResponse(BaseModel):
    message: str
    data: WaitlistEntryResponse


class WaitlistStatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_subscribers: int = Field(..., alias="totalSubscribers")
    message: str


class WaitlistAdminEntry(BaseModel):
    """Raw waitlist row for the admin viewer."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    subscribed_at: datetime


class WaitlistAdminResponse(BaseModel):
    data: List[WaitlistAdminEntry]
    total: int
    message: str
