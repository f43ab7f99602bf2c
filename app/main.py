from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.endpoints.contact import router as contact_router, envelope
from app.constants.constants import RATE_LIMITED_MESSAGE
from app.core.errors import MethodNotAllowed

from slowapi.errors import RateLimitExceeded
import logging
from contextlib import asynccontextmanager
from app.core.config import settings
from app.core.limiter import limiter

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Async context manager for app lifespan events"""
    logger.info(f"🚀 Starting {settings.SITE_NAME} mail service...")
    logger.info(f"📮 SMTP relay: {settings.SMTP_HOST}:{settings.SMTP_PORT} (STARTTLS: {settings.SMTP_START_TLS})")
    if not settings.SMTP_USERNAME:
        logger.warning("⚠️ SMTP_USERNAME is not set, relay login will be skipped")

    try:
        logger.info("🏁 Mail service startup complete")
        yield
    finally:
        logger.info("👋 Mail service shutdown complete")


app = FastAPI(
    title=f"{settings.SITE_NAME} Website API",
    description="Mail forwarding endpoint for the website forms",
    version="1.0.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Request: {request.method} {request.url}")
    logger.info(f"Origin: {request.headers.get('origin')}")
    response = await call_next(request)
    logger.info(f"Response status: {response.status_code}")
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"🚦 Rate limit hit for {request.client.host if request.client else 'unknown'}: {exc.detail}")
    response = envelope("error", RATE_LIMITED_MESSAGE, 429)
    return request.app.state.limiter._inject_headers(
        response, getattr(request.state, "view_rate_limit", None)
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        error = MethodNotAllowed()
        logger.info(f"⚠️ {request.method} {request.url.path} rejected: {error.message}")
        return envelope("error", error.message, error.status_code)
    logger.info(f"⚠️ {request.method} {request.url.path} failed with {exc.status_code}: {exc.detail}")
    response = envelope("error", str(exc.detail), exc.status_code)
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logging.error(f"Validation Error: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors()},
    )


@app.get("/", tags=["Health Check"])
async def health_check():
    return {
        "status": "healthy",
        "service": f"{settings.SITE_NAME} Website API",
        "environment": settings.ENVIRONMENT,
        "smtp_host": settings.SMTP_HOST,
    }


app.include_router(contact_router, tags=["Contact"])

logger.info(f"✅ Loaded {len(app.routes)} routes")
