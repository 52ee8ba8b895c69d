"""FastAPI application entry point"""
import random
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from prometheus_fastapi_instrumentator import Instrumentator

from app.api import auth, dashboard, health, ledger, recommendations
from app.config import settings
from app.middleware.rate_limit import limiter
from app.utils.auth import UserDirectory
from app.utils.estimation import RandomEstimator
from app.utils.ledger_store import build_ledger_store
from app.utils.logger import logger, setup_logging

# Setup logging
setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)


def init_state(app: FastAPI) -> None:
    """Build the process-wide state. Nothing is flushed on shutdown."""
    rng = random.Random(settings.RANDOM_SEED)
    app.state.rng = rng
    app.state.estimator = RandomEstimator(rng)
    app.state.ledger_store = build_ledger_store(settings.LEDGER_BACKEND, settings.LEDGER_HASH_MODE, rng)
    app.state.recommendation_history = []
    app.state.users = UserDirectory.with_demo_users()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    init_state(app)
    logger.info("AgriAdvisor backend starting up", extra={
        "ledger_backend": settings.LEDGER_BACKEND,
        "hash_mode": settings.LEDGER_HASH_MODE,
        "rate_limiting": settings.RATE_LIMIT_ENABLED,
        "monitoring": settings.METRICS_ENABLED
    })
    yield
    # Shutdown
    logger.info("AgriAdvisor backend shutting down")


# Create FastAPI app
app = FastAPI(
    title="AgriAdvisor",
    description="Crop recommendations, farm dashboards and a recommendation ledger",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# ===== Middleware Setup =====

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Monitoring middleware
if settings.METRICS_ENABLED:
    from app.middleware.monitoring import MonitoringMiddleware
    app.add_middleware(MonitoringMiddleware)

    # Prometheus metrics
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_respect_env_var=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/metrics", "/health", "/health/ready", "/health/live"],
        inprogress_name="agriadvisor_requests_inprogress",
        inprogress_labels=True
    )
    instrumentator.instrument(app)
    instrumentator.expose(app, endpoint=settings.METRICS_PATH, include_in_schema=False)

# Rate limiting: /api routes carry @rate_limit decorators; RATE_LIMIT_ENABLED
# switches the limiter itself on or off
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Handle rate limit exceeded errors"""
    logger.warning(
        "Rate limit exceeded",
        extra={
            "path": request.url.path,
            "method": request.method
        }
    )
    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please try again later.",
            "detail": str(exc.detail)
        }
    )


# ===== Route Setup =====

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(recommendations.router)
app.include_router(ledger.router)
app.include_router(dashboard.router)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "service": "AgriAdvisor",
        "version": "0.1.0",
        "status": "operational",
        "docs": "/docs",
        "health": "/health",
        "metrics": settings.METRICS_PATH if settings.METRICS_ENABLED else None
    }


# ===== Error Handlers =====

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for uncaught errors"""
    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "method": request.method
        },
        exc_info=True
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later."
        }
    )
