"""
main.py — User Registry application

Builds the FastAPI app: logging, lifespan startup, request-id and
security-header middleware, structured error handlers, rate limiting,
and the users router.

Called by: uvicorn (app.main:app)
Depends on: config, logging_config, startup, routers.users
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from loguru import logger
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIASGIMiddleware
from sqlalchemy import text as sqltext
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import APP_VERSION
from .database import get_db
from .logging_config import setup_logging
from .rate_limit import limiter
from .routers import users
from .schemas.errors import ErrorResponse
from .startup import run_startup_migrations

setup_logging()
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    run_startup_migrations()
    log.info(f"User Registry {APP_VERSION} ready")
    yield


app = FastAPI(title="User Registry", version=APP_VERSION, lifespan=lifespan)
app.state.limiter = limiter
app.add_middleware(SlowAPIASGIMiddleware)
app.include_router(users.router)


# ── Middleware ───────────────────────────────────────────────────────


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = uuid.uuid4().hex[:8]
    request.state.request_id = request_id
    start = time.perf_counter()
    with logger.contextualize(request_id=request_id):
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "{method} {path} -> {status} ({ms:.1f} ms)",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            ms=elapsed_ms,
        )
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


# ── Error handlers ───────────────────────────────────────────────────


def _error(request: Request, status_code: int, message: str, detail: list | None = None) -> JSONResponse:
    body = ErrorResponse(
        error=message,
        status_code=status_code,
        request_id=getattr(request.state, "request_id", ""),
        detail=detail,
    )
    return JSONResponse(body.model_dump(), status_code=status_code)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error(request, exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    detail = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]
    return _error(request, 422, "Validation error", detail)


@app.exception_handler(RateLimitExceeded)
def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return _error(request, 429, f"Rate limit exceeded: {exc.detail}")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    log.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error(request, 500, "Internal server error")


# ── Root & health ────────────────────────────────────────────────────


@app.get("/", include_in_schema=False)
def index():
    return RedirectResponse(users.COLLECTION_ROOT, status_code=303)


@app.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(sqltext("SELECT 1"))
        db_status = "ok"
    except Exception as e:
        log.error(f"Health check database probe failed: {e}")
        db_status = "error"
    return {"status": "ok" if db_status == "ok" else "degraded", "version": APP_VERSION, "db": db_status}
