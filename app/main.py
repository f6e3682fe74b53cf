from fastapi import FastAPI
from app.core.config import get_settings
from app.core.lifespan import lifespan
from app.api.v1.routers.health import router as health_router
from app.api.v1.routers.products import router as products_router
from app.api.v1.routers.recommendations import router as recommendations_router
from app.api.v1.routers.orders import router as orders_router, admin_router
from app.core.logging import configure_logging

from fastapi.middleware.cors import CORSMiddleware
import logging

settings = get_settings()
configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),       # ALLOWED_ORIGINS, or local dev servers
    allow_credentials=True,                         # session_id cookie
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["content-type", "x-session-id"],
    max_age=86400,
)

# ------- Routes -------
app.include_router(health_router)
app.include_router(products_router)          # catalog
app.include_router(recommendations_router)   # related products + click tracking
app.include_router(orders_router)            # checkout
app.include_router(admin_router)             # order admin + sales stats
