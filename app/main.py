"""
FocusZen Backend API
Pomodoro focus timer with streaks, gamification and premium gating.
"""
from dotenv import load_dotenv
load_dotenv()

import logging
import os
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True  # Override any existing configuration
)

logger = logging.getLogger(__name__)


def run_migrations() -> None:
    """Run Alembic migrations on startup. Uses alembic.ini and DATABASE_URL.
    Fails startup if migrations fail, so the DB is never left out of sync."""
    project_root = Path(__file__).resolve().parent.parent
    alembic_ini = project_root / "alembic.ini"
    if not alembic_ini.exists():
        logger.warning("alembic.ini not found, skipping Alembic migrations")
        return
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        logger.warning("DATABASE_URL is not set, skipping Alembic migrations (using local SQLite)")
        return
    # Normalize postgres:// -> postgresql:// for SQLAlchemy
    if db_url.startswith("postgres://"):
        db_url = "postgresql://" + db_url[10:]
    try:
        alembic_cfg = Config(str(alembic_ini))
        alembic_cfg.set_main_option("script_location", str(project_root / "alembic"))
        alembic_cfg.set_main_option("sqlalchemy.url", db_url)
        command.upgrade(alembic_cfg, "head")
        logger.info("Alembic migrations completed successfully")
    except Exception as e:
        logger.exception("Alembic migration failed: %s", e)
        raise  # Fail startup so DB is not left out of sync; fix migration or env and redeploy


from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.routes import (
    auth,
    timer,
    users,
    quotes,
    analytics,
    premium,
    webhooks,
    tasks,
    game,
    ai,
    screen_usage,
    challenges,
)
from app.db.base import Base
from app.db.session import engine
from app.dependencies.premium import require_premium_access
from app.services.billing import BillingService
# Import all models to ensure they're registered with Base
from app import models  # noqa: F401

FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "").split(",")
    if origin.strip()
]


def create_app(billing: BillingService = None) -> FastAPI:
    app = FastAPI(title="FocusZen")

    # Built once per process; routes receive it through get_billing_service
    app.state.billing = billing or BillingService.from_env()

    @app.on_event("startup")
    async def startup_event():
        """Create tables, then run Alembic migrations on every server restart."""
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created")
        except Exception:
            logger.exception("Error creating tables")
            raise

        run_migrations()

        if not app.state.billing.is_configured:
            logger.warning("[BILLING] STRIPE_SECRET_KEY/STRIPE_PRICE_ID not set; subscriptions disabled")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[FRONTEND_URL, "http://localhost:3000", "http://localhost:5173", *CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Open to any signed-in user
    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(timer.router, prefix="/api/timer", tags=["Timer"])
    app.include_router(users.router, prefix="/api/user", tags=["User"])
    app.include_router(quotes.router, prefix="/api/quotes", tags=["Quotes"])
    app.include_router(analytics.router, prefix="/api/analytics", tags=["Analytics"])
    app.include_router(premium.router, prefix="/api", tags=["Premium"])
    app.include_router(webhooks.router, prefix="/api/webhooks", tags=["Webhooks"])

    # Premium features: one gate for all of them, applied before any handler runs
    premium_gate = [Depends(require_premium_access)]
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"], dependencies=premium_gate)
    app.include_router(game.router, prefix="/api/game", tags=["Game"], dependencies=premium_gate)
    app.include_router(ai.router, prefix="/api/ai", tags=["AI Coach"], dependencies=premium_gate)
    app.include_router(screen_usage.router, prefix="/api/screen-usage", tags=["Screen Usage"], dependencies=premium_gate)
    app.include_router(challenges.router, prefix="/api/challenges", tags=["Challenges"], dependencies=premium_gate)

    return app


app = create_app()
