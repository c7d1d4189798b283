"""
FastAPI app assembly: logging, middleware, error mapping and router wiring.
"""
import logging
import os
import time

from fastapi import FastAPI, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from woodys.api.comments import router as comments_router
from woodys.api.project_lists import router as project_lists_router
from woodys.api.projects import router as projects_router
from woodys.api.ratings import router as ratings_router
from woodys.api.support import router as support_router
from woodys.api.users import router as users_router
from woodys.errors import InternalError, WoodysError
from woodys.utils.rate_limit import RequestRateLimiter
from woodys.utils.runtime import env_list

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Woodys Service",
    description="API for sharing woodworking projects: comments, ratings and curated project lists.",
    version="1.0.0",
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

origins = env_list("CORS_ALLOWED_ORIGINS") or [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:8000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.rate_limiter = RequestRateLimiter.from_env()


def _rate_limit_key(request: Request) -> str:
    h = request.headers
    identity = h.get("x-firebase-uid") or h.get("x-auth-request-user") or h.get("x-user-id")
    if identity:
        return f"user:{identity.strip()}"
    host = request.client.host if request.client else "unknown"
    return f"ip:{host}"


# Middleware: per-caller request budget
@app.middleware("http")
async def enforce_rate_limit(request: Request, call_next):
    limiter = getattr(request.app.state, "rate_limiter", None)
    if limiter is not None:
        allowed, retry_after = limiter.hit(_rate_limit_key(request))
        if not allowed:
            return JSONResponse(
                {"detail": "Rate limit exceeded. Try again later.", "error": "rate_limited"},
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={"Retry-After": str(max(1, int(retry_after + 0.999)))},
            )
    return await call_next(request)


# Middleware: access log
@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "request method=%s path=%s status=%s duration_ms=%.1f",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response


@app.exception_handler(WoodysError)
async def handle_woodys_error(request: Request, exc: WoodysError):
    if isinstance(exc, InternalError):
        logger.error("internal_error path=%s error=%s", request.url.path, exc, exc_info=exc)
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    field = None
    if errors:
        loc = [str(part) for part in errors[0].get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or None
    return JSONResponse(
        {"detail": "Invalid request", "error": "validation", "field": field, "errors": errors},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@app.exception_handler(SQLAlchemyError)
async def handle_store_error(request: Request, exc: SQLAlchemyError):
    logger.error("store_error path=%s error=%s", request.url.path, exc, exc_info=exc)
    return JSONResponse(InternalError("internal server error").to_dict(), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


app.include_router(support_router)
app.include_router(users_router)
app.include_router(projects_router)
app.include_router(comments_router)
app.include_router(ratings_router)
app.include_router(project_lists_router)
