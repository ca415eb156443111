"""Configuration settings for the application."""
from pydantic_settings import BaseSettings
from pydantic import Field
from dotenv import load_dotenv

# Ensure .env values are loaded into os.environ before settings are built
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_url: str = Field(..., alias="DATABASE_URL")
    # Payment gateway
    stripe_secret_key: str = Field(..., alias="STRIPE_SECRET_KEY")
    stripe_api_base: str = Field(default="https://api.stripe.com/v1", alias="STRIPE_API_BASE")
    stripe_api_version: str = Field(default="2023-10-16", alias="STRIPE_API_VERSION")
    stripe_timeout: float = Field(default=20.0, alias="STRIPE_TIMEOUT")
    currency: str = Field(default="usd", alias="CURRENCY")
    platform_fee_percent: float = Field(default=2.0, alias="PLATFORM_FEE_PERCENT")
    # Session provider
    session_secret: str = Field(..., alias="SESSION_SECRET")
    session_cookie_name: str = Field(default="session", alias="SESSION_COOKIE_NAME")
    session_max_age_seconds: int = Field(default=30 * 24 * 60 * 60, alias="SESSION_MAX_AGE_SECONDS")
    session_cookie_secure: bool = Field(default=True, alias="SESSION_COOKIE_SECURE")
    # Link previews
    site_url: str = Field(default="https://famousince.com", alias="SITE_URL")
    preview_image_path: str = Field(default="images/famous-since-preview.png", alias="PREVIEW_IMAGE_PATH")
    # Coming soon gate
    coming_soon_enabled: bool = Field(default=True, alias="COMING_SOON_ENABLED")
    project_name: str = "Famous Since"
    api_version: str = "v1"

    class Config:
        env_file = ".env"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"


settings = Settings()
