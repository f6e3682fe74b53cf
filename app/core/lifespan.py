# app/core/lifespan.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.db import mongo, redis as r
from app.core.config import get_settings
from app.domain.repositories.catalog_repo import get_catalog
from app.utils import tasks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    # Catalog is mandatory: a broken catalog file must stop the app
    get_catalog()

    # Mongo mandatory (client stays lazy if the first ping fails)
    await mongo.connect()

    # Redis optional
    await r.connect()

    yield

    # --- Shutdown ---
    # Let in-flight interaction/telemetry writes finish before closing Mongo
    await tasks.drain(timeout=settings.background_drain_timeout_s)

    try:
        await r.disconnect()
    except Exception as e:
        logger.warning("Redis disconnect failed: %s", e)

    try:
        await mongo.disconnect()
        logger.info("Mongo disconnected")
    except Exception as e:
        logger.warning("Mongo disconnect failed: %s", e)
