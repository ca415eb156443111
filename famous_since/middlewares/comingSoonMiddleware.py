"""Coming-soon gate and admin page guard."""
import re
from urllib.parse import quote
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request as StarletteRequest
from data.database.connection import SessionLocal
from data.database.store_models import SiteConfig
from famous_since.auth.session import get_current_session, is_admin
from famous_since.config import settings

COMING_SOON_PATH = "/ComingSoon"
LOGIN_PATH = "/login"

# Always served: the API root, API, docs and static assets
PASSTHROUGH_PATHS = ("/",)
PASSTHROUGH_PREFIXES = ("/api/", "/health", "/docs", "/redoc", "/openapi.json", "/_next/", "/favicon.ico")
STATIC_ASSET = re.compile(r"\.(png|jpg|jpeg|gif|svg|ico|webp|mp4|webm|ogg)$", re.IGNORECASE)

# Still reachable while the store is not deployed
PRE_LAUNCH_PATHS = (COMING_SOON_PATH, LOGIN_PATH, "/admin")
PRE_LAUNCH_PREFIXES = (
    "/contact/", "/services/", "/home/", "/about/", "/images/", "/img/",
    "/portfolio/", "/faq/", "/not_found/"
)


def _matches(path: str, base: str) -> bool:
    return path == base or path.startswith(base + "/")


def get_site_deployment_status() -> bool:
    """Read the `deploy_site` switch. Any lookup error counts as not deployed."""
    db = SessionLocal()
    try:
        row = db.query(SiteConfig).filter(SiteConfig.key == "deploy_site").first()
        return bool(row and row.value)
    except SQLAlchemyError as e:
        print(f"[COMING_SOON] Error fetching site config: {e}")
        return False
    finally:
        db.close()


class ComingSoonMiddleware(BaseHTTPMiddleware):
    """Redirect page requests to the coming-soon page until the site is deployed."""

    async def dispatch(self, request: StarletteRequest, call_next):
        path = request.url.path

        if path in PASSTHROUGH_PATHS or path.startswith(PASSTHROUGH_PREFIXES) or STATIC_ASSET.search(path):
            return await call_next(request)

        if settings.coming_soon_enabled and not await run_in_threadpool(get_site_deployment_status):
            allowed = (
                any(_matches(path, base) for base in PRE_LAUNCH_PATHS)
                or path.startswith(PRE_LAUNCH_PREFIXES)
            )
            if not allowed:
                return RedirectResponse(url=COMING_SOON_PATH, status_code=307)

        if _matches(path, "/admin"):
            user = get_current_session(request)
            if user is None:
                return RedirectResponse(url=f"{LOGIN_PATH}?callbackUrl={quote(path)}", status_code=307)
            if not is_admin(user):
                return RedirectResponse(url="/", status_code=307)
            if path == "/admin":
                return RedirectResponse(url="/admin/overview", status_code=307)

        return await call_next(request)
