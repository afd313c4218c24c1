# merchant_store/main.py
"""
Merchant Store API
Main Application Entry Point
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from merchant_store.core.config import settings
from merchant_store.core.database import engine
from merchant_store.core.exceptions import register_exception_handlers
from merchant_store.api.v1 import auth, stores

load_dotenv()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(settings.UPLOAD_FOLDER)


# ========================================
# LIFESPAN EVENT
# ========================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""

    # Only create tables automatically in dev, not production
    if settings.ENVIRONMENT != "production":
        from merchant_store.init_db import init
        init()

    for route in app.routes:
        if hasattr(route, 'methods') and hasattr(route, 'path'):
            methods = ', '.join(sorted(route.methods - {'HEAD', 'OPTIONS'}))
            if methods and route.path.startswith(settings.API_V1_STR):
                logger.info(f"  {methods:8} {route.path}")

    logger.info(f"{settings.PROJECT_NAME} ready on port {os.getenv('PORT', '8080')}")

    yield

    logger.info("Server stopped")


# ========================================
# CREATE APP
# ========================================
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan
)

register_exception_handlers(app)


# ========================================
# MIDDLEWARE - CORS
# ========================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


# ========================================
# STATIC FILES (store logos)
# ========================================
STATIC_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


# ========================================
# API ROUTERS
# ========================================
app.include_router(auth.router, prefix=settings.API_V1_STR)
app.include_router(stores.router, prefix=settings.API_V1_STR, tags=["stores"])


@app.get("/health")
def health():
    """Health check endpoint"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {"status": "unhealthy", "database": "disconnected"}
