from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.database import Database
from shared.config.settings import APP_NAME, APP_VERSION, CORS_ORIGINS, DATABASE_URL, SQL_ECHO
from shared.http import responses
from shared.http.errors import register_error_handlers
from shared.observability import setup_observability
from shared.security import limiter

# IMPORTANT: import models so they register with Base
from services.auth_service import models as auth_models  # noqa: F401
from services.customer_service import models as customer_models  # noqa: F401
from services.order_service import models as order_models  # noqa: F401

from services.auth_service.router import router as auth_router
from services.customer_service.router import router as customer_router
from services.order_service.router import router as order_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = Database(DATABASE_URL, echo=SQL_ECHO, pool_pre_ping=True)
    await database.create_all()
    app.state.db = database
    logger.info("database_ready", dialect=database.engine.dialect.name)
    try:
        yield
    finally:
        await database.dispose()
        logger.info("database_disposed")


app = FastAPI(title=APP_NAME, version=APP_VERSION, lifespan=lifespan)

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(app, "order_management_api")

# --- SECURITY SETUP ---
app.state.limiter = limiter
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)

app.include_router(auth_router)
app.include_router(customer_router)
app.include_router(order_router)


@app.get("/health", tags=["Health"])
async def health_check():
    return responses.success(
        "Order Management API is running",
        {"timestamp": datetime.now(timezone.utc).isoformat(), "version": APP_VERSION},
    )
