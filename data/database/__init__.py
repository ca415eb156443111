"""Database data layer package."""
from .connection import engine, SessionLocal, get_db, Base, init_db
from .catalog_models import ProductType, ProductSize, Product
from .store_models import WaitlistEntry, Consultation, SiteConfig, User, StripeConnectAccount
from .product_schema import ProductCreate, ProductUpdate, ProductResponse, ProductTypeResponse

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "Base",
    "init_db",
    "ProductType",
    "ProductSize",
    "Product",
    "WaitlistEntry",
    "Consultation",
    "SiteConfig",
    "User",
    "StripeConnectAccount",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductTypeResponse"
]
