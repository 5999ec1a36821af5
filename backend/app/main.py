"""
Aksa Fashion Storefront Backend
FastAPI application entry point

- Shipping quotes with the free-shipping promotion
- Guest checkout and order tracking
- Rate limiting with SlowAPI
- Error sanitization middleware
- Security headers
- Health endpoint with DB ping
- Request size limits
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from app.api.routes import shipping, checkout, orders
from app.core.config import settings
from app.core.database import engine, get_db_session
from app.core.rate_limit import limiter, rate_limit_exceeded_handler
from app.core.error_handler import ErrorSanitizationMiddleware
from app.core.security_headers import SecurityHeadersMiddleware
from app.core.utils import utcnow
from app.migrations.storefront_tables import migrate_storefront_tables

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed the shipping catalog on startup."""
    if settings.AUTO_MIGRATE:
        try:
            await migrate_storefront_tables(engine)
        except Exception as e:
            # Serve anyway; shipping quotes degrade to an empty list
            logger.error(f"Startup migration failed: {type(e).__name__}: {e}")
    else:
        logger.info("Startup migration DISABLED via config")

    logger.info(f"{settings.APP_NAME} API started ({settings.ENVIRONMENT})")

    yield

    await engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(
    lifespan=lifespan,
    title=f"{settings.APP_NAME} Storefront API",
    description="""
## Storefront API

Checkout backend for the bridal and evening wear storefront.

### Features
- **Shipping**: Shipping quotes with free shipping on orders of €150 or more
- **Checkout**: Guest checkout, totals computed server-side
- **Orders**: Order confirmation and guest order tracking

### Rate Limits
- Checkout: 10 requests/minute
- Order lookup: 20 requests/minute
- General: 100 requests/minute
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Shipping", "description": "Shipping quotes for the cart and checkout"},
        {"name": "Checkout", "description": "Order creation"},
        {"name": "Orders", "description": "Order confirmation and tracking"},
    ],
    license_info={
        "name": "Proprietary",
    },
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


MAX_BODY_BYTES = 1024 * 1024


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Answer 413 for bodies over MAX_BODY_BYTES; carts are small JSON documents."""

    async def dispatch(self, request: Request, call_next):
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > MAX_BODY_BYTES:
            logger.warning(f"Rejected {declared}-byte body on {request.method} {request.url.path}")
            return JSONResponse(
                status_code=413,
                content={"error": "Request body too large"},
            )
        return await call_next(request)


app.add_middleware(RequestSizeLimitMiddleware)
app.add_middleware(ErrorSanitizationMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(shipping.router, prefix="/api", tags=["Shipping"])
app.include_router(checkout.router, prefix="/api", tags=["Checkout"])
app.include_router(orders.router, prefix="/api", tags=["Orders"])


@app.get("/", tags=["Health"])
async def root():
    return {
        "message": f"{settings.APP_NAME} Storefront API",
        "version": "1.0.0",
        "status": "operational",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check with an actual DB ping.
    Returns 503 if the database is unreachable.
    """
    health_status = {
        "status": "healthy",
        "database": "unknown",
        "timestamp": utcnow().isoformat(),
    }

    try:
        async with get_db_session() as db:
            await db.execute(text("SELECT 1"))
        health_status["database"] = "connected"
    except Exception as e:
        logger.warning(f"Health check DB ping failed: {type(e).__name__}: {e}")
        health_status["database"] = f"error: {type(e).__name__}"
        health_status["status"] = "unhealthy"
        return JSONResponse(status_code=503, content=health_status)

    return health_status
