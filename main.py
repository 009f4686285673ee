"""
Boutique - Application Entry Point
===================================
FastAPI app initialization, middleware, and router registration.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from config import settings
from config.database import Base, engine
from modules.cart.service import CartSessions

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("boutique")

# ==========================================
# Import ALL models so Base can see them
# ==========================================
from modules.user.models import User  # noqa: F401
from modules.catalog.models import Product  # noqa: F401

# ==========================================
# Import routers
# ==========================================
from modules.auth.routes import router as auth_router
from modules.catalog.routes import router as catalog_router
from modules.cart.routes import router as cart_router


# ==========================================
# Exception handler: malformed request -> 400 in the API error shape
# ==========================================
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Bodies that do not parse or have wrongly typed fields get the same 400 as failed field rules."""
    errors = {}
    for err in exc.errors():
        # Last named part of the location: the field alias, or "body" for an unparsable body
        names = [part for part in err.get("loc", ()) if isinstance(part, str)]
        errors.setdefault(names[-1] if names else "body", "Valeur invalide.")
    logger.info("Rejected malformed request on %s: %s", request.url.path, sorted(errors))
    return JSONResponse({"message": "Requête invalide.", "errors": errors}, status_code=400)


@asynccontextmanager
async def lifespan(app):
    # Auto-create any missing tables (safe for existing tables)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
    yield


def create_app() -> FastAPI:
    """Build the API. Each app owns its own cart sessions."""
    app = FastAPI(
        title="Boutique",
        description="API e-commerce : catalogue, panier, inscription et connexion",
        version="1.0.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.state.carts = CartSessions(
        max_sessions=settings.CART_MAX_SESSIONS,
        ttl_seconds=settings.CART_SESSION_TTL_MINUTES * 60,
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # ==========================================
    # Middleware: CORS (front end runs on its own origin)
    # ==========================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    async def health():
        return "API e-commerce en ligne."

    app.include_router(catalog_router)
    app.include_router(auth_router)
    app.include_router(cart_router)
    return app


app = create_app()
