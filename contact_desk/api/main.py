import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contact_desk import __version__
from contact_desk.adapters.sqlite.migrator import SQLiteMigrator
from contact_desk.api.deps import get_settings
from contact_desk.api.errors import setup_error_handlers
from contact_desk.app_shell.config import validate_ops_rules
from contact_desk.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    settings = app.dependency_overrides.get(get_settings, get_settings)()

    # Load rules, check the environment and migrate the database (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
        validate_ops_rules(rules)
        logger.info("Rules loaded from %s", settings.rules_path)
        SQLiteMigrator(settings.db_path).run_migrations()
    except Exception:
        logger.critical("Startup failed", exc_info=True)
        sys.exit(1)

    yield


app = FastAPI(
    title="Contact Desk API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

setup_error_handlers(app)

# --- Routers ---
from contact_desk.api.routes import auth, entries  # noqa: E402

app.include_router(auth.router, tags=["Auth"])
app.include_router(entries.router, prefix="/user-entries", tags=["Entries"])


# CORS (the Flet client and browser tools call from anywhere)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=600,
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok"}
