"""Main FastAPI application."""
import sys
from pathlib import Path

# Add project root to path if not already there
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from famous_since.config import settings
from famous_since.middlewares.comingSoonMiddleware import ComingSoonMiddleware
from famous_since.routes.admin import router as admin_router
from famous_since.routes.auth import router as auth_router
from famous_since.routes.checkout import router as checkout_router
from famous_since.routes.connect import router as connect_router
from famous_since.routes.shop import router as shop_router
from famous_since.routes.site import router as site_router
from famous_since.routes.waitlist import router as waitlist_router
from data.database.connection import init_db

# Create database tables and default site switches
init_db()

# Initialize FastAPI app
app = FastAPI(
    title=settings.project_name,
    version=settings.api_version,
    description="Famous Since storefront API - shop, checkout, waitlist & admin"
)

app.add_middleware(ComingSoonMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(shop_router)
app.include_router(checkout_router)
app.include_router(connect_router)
app.include_router(auth_router)
app.include_router(waitlist_router)
app.include_router(site_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Famous Since API",
        "version": settings.api_version,
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
