"""
Main.py works as a main function for the application
Api app starts from here
"""

import time
from contextlib import asynccontextmanager
from logging import getLogger
from logging.config import dictConfig

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.database import init_db
from app.routers import (activities_router, appointments_router, auth_router,
                         clients_router, dashboard_router, diet_plans_router,
                         measurements_router, telegram_router, upload_router)
from app.services.telegram_service import get_telegram_service
from app.utils.logger import LOGGING_CONFIG

# ----------------------------------------------------------------------
# Logging
# ----------------------------------------------------------------------
dictConfig(LOGGING_CONFIG)
logger = getLogger(__name__)


# ----------------------------------------------------------------------
# Lifespan: create tables on start, stop the Telegram bot on shutdown
# ----------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()

    yield

    await get_telegram_service().stop()
    logger.info("Shutdown complete")


# ----------------------------------------------------------------------
# FastAPI application
# ----------------------------------------------------------------------
app = FastAPI(
    title="Diyetim",
    description="Diet and fitness coaching backend API",
    version="1.0.0",
    docs_url=(
        f"{settings.API_PREFIX}/docs"
        if settings.DEPLOY_PHASE in ("dev", "local")
        else None
    ),
    lifespan=lifespan,
)


# ----------------------------------------------------------------------
# Exception handlers
# ----------------------------------------------------------------------
def _validation_message(error: dict) -> str:
    loc = error.get("loc") or []
    field = loc[-1] if loc else "unknown"
    msg = error.get("msg", "")
    error_type = error.get("type", "")

    if error_type == "string_too_short":
        min_length = error.get("ctx", {}).get("min_length", "")
        return f"{field} en az {min_length} karakter olmalıdır."
    elif "valid email" in msg.lower():
        return f"{field} geçerli bir e-posta adresi olmalıdır."
    elif error_type == "missing":
        return f"{field} zorunlu bir alandır."
    elif error_type == "value_error":
        return f"{field} {error.get('ctx', {}).get('error', msg)}."
    return f"{field}: {msg}"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    messages = [_validation_message(error) for error in errors]
    logger.warning(f"Validation failed on {request.url.path}: {'; '.join(messages)}")

    return JSONResponse(
        status_code=400,
        content={"message": "; ".join(messages), "detail": jsonable_encoder(errors)},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal Server Error"})


# ----------------------------------------------------------------------
# Request logging
# ----------------------------------------------------------------------
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    if request.url.path.startswith(settings.API_PREFIX):
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{request.method} {request.url.path} {response.status_code} in {elapsed_ms:.0f}ms")
    return response


# ----------------------------------------------------------------------
# CORS
# ----------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ----------------------------------------------------------------------
# Routers
# ----------------------------------------------------------------------
app.include_router(auth_router)
app.include_router(clients_router)
app.include_router(measurements_router)
app.include_router(diet_plans_router)
app.include_router(appointments_router)
app.include_router(activities_router)
app.include_router(dashboard_router)
app.include_router(upload_router)
app.include_router(telegram_router)


# ----------------------------------------------------------------------
# Default routes
# ----------------------------------------------------------------------
@app.get("/")
async def root():
    return {"message": "Diyetim API"}


@app.get(f"{settings.API_PREFIX}/health")
async def health():
    return {"status": "ok"}
