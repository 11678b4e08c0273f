# app/main.py
import asyncio
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.errors import StorefrontError
from app.core.health import HealthMonitor
from app.database import create_db_and_tables, manager

# Import models so SQLModel metadata is populated before create_all()
from app.models import store as _store_models  # noqa: F401
from app.models import product as _product_models  # noqa: F401
from app.models import cart as _cart_models  # noqa: F401
from app.models import order as _order_models  # noqa: F401


# Routers
from app.routers.health import router as health_router
from app.routers.stores import router as stores_router
from app.routers.products import router as products_router
from app.routers.cart import router as cart_router
from app.routers.checkout import router as checkout_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")

# Error messages for malformed path/form parameters
INVALID_PARAM_MESSAGES: dict[str, str] = {
    "store_id": "Invalid store ID",
    "product_id": "Invalid product ID",
    "quantity": "Invalid quantity",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Connect to Postgres and create tables. A failure is logged and the
        service starts degraded; the health monitor keeps retrying.
      - Start the health monitor.

    Shutdown:
      - Stop the monitor and dispose of the pool.
    """
    logger.info("🔄 Startup: Connecting to Postgres...")
    try:
        manager.connect()
        create_db_and_tables(manager)
        logger.info("✅ Startup: DB connection OK, tables verified.")
    except StorefrontError as e:
        logger.error(f"❌ Startup: DB connection FAILED, starting degraded: {e}")

    monitor = HealthMonitor(manager, settings.HEALTH_CHECK_INTERVAL)
    monitor.start()
    yield
    await monitor.stop()
    manager.close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def enforce_request_deadline(request: Request, call_next):
    """
    Give every request REQUEST_TIMEOUT seconds.

    The deadline is stored on request.state so database sessions can
    cancel the query itself (see app.database.get_session).
    """
    timeout = settings.REQUEST_TIMEOUT
    request.state.deadline = time.monotonic() + timeout
    try:
        return await asyncio.wait_for(call_next(request), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("Request %s %s timed out", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            content={"error": "request timed out"},
        )


# --- Error mapping: every error body is {"error": <message>} ---


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    field = str(errors[0]["loc"][-1]) if errors and errors[0].get("loc") else ""
    message = INVALID_PARAM_MESSAGES.get(field, f"Invalid {field or 'request'}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


app.include_router(health_router)

# Versioned API prefix, e.g. /api/v1
app.include_router(stores_router, prefix=settings.API_V1_STR)
app.include_router(products_router, prefix=settings.API_V1_STR)
app.include_router(cart_router, prefix=settings.API_V1_STR)
app.include_router(checkout_router, prefix=settings.API_V1_STR)
