"""
Billing API - FastAPI Application
Plan catalog, prorated upgrade pricing and subscription schema
"""
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
from datetime import datetime, timezone

from app.database import init_db
from app.config import settings
from app.core.security import get_current_user
from app.api.errors import register_error_handlers
from app.api.routes import health
from app.api.v1 import plans, users

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    logger.info("Starting Billing API...")

    try:
        init_db()
        logger.info("Database initialized")
    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}")

    logger.info(f"API running on {settings.app_env} environment")
    yield
    logger.info("Shutting down Billing API...")


app = FastAPI(
    title=settings.app_name,
    description="Backend API for plans and subscription billing",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.get("/")
async def root() -> dict:
    return {
        "name": settings.app_name,
        "environment": settings.app_env,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(health.router, prefix=settings.api_v1_prefix, tags=["Health"])
app.include_router(
    plans.router,
    prefix=f"{settings.api_v1_prefix}/plans",
    tags=["Plans"],
    dependencies=[Depends(get_current_user)],
)
app.include_router(
    users.router,
    prefix=f"{settings.api_v1_prefix}/users",
    tags=["Users"],
    dependencies=[Depends(get_current_user)],
)
