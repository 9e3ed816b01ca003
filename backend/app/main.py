import logging
import os

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException

from .config import API_PREFIX
from .exceptions import DomainException, ProblemDetail
from .routers import auth, groups, matches, players, rankings, tournaments
from .utils.sentry import init_sentry

logger = logging.getLogger(__name__)

SENTRY_ENABLED = init_sentry()


def _allowed_origins() -> list[str]:
    """Parse ``ALLOWED_ORIGINS``; wildcard or empty values are refused."""

    raw = os.getenv("ALLOWED_ORIGINS", "")
    if not raw.strip():
        raise ValueError(
            "ALLOWED_ORIGINS must be set to a comma-separated list of trusted origins"
        )
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    if not origins:
        raise ValueError("ALLOWED_ORIGINS must contain at least one origin")
    if "*" in origins:
        raise ValueError("ALLOWED_ORIGINS cannot contain the '*' wildcard")
    return origins


ALLOWED_ORIGINS = _allowed_origins()
ALLOW_CREDENTIALS = os.getenv("ALLOW_CREDENTIALS", "true").lower() == "true"

# Refuse to boot with a missing or weak signing key.
auth.get_jwt_secret()


# -----------------------------------------------------------------------------
# Error handlers
# -----------------------------------------------------------------------------
def problem_response(problem: ProblemDetail, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(),
        media_type="application/problem+json",
        headers=headers,
    )


async def domain_exception_handler(request: Request, exc: DomainException):
    return problem_response(exc.to_problem())


async def http_exception_handler(request: Request, exc: HTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    problem = ProblemDetail(
        title=detail,
        status=exc.status_code,
        code=getattr(exc, "code", f"http_{exc.status_code}"),
        detail=detail,
    )
    return problem_response(problem, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    issues = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return problem_response(
        ProblemDetail(
            title="Validation error",
            status=422,
            code="validation_error",
            detail=issues,
        )
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception", exc_info=(type(exc), exc, exc.__traceback__))
    return problem_response(
        ProblemDetail(
            title="Internal Server Error",
            status=500,
            code="internal_server_error",
            detail=str(exc),
        )
    )


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------
def _build_api_router() -> APIRouter:
    api = APIRouter(prefix=API_PREFIX)

    @api.get("/healthz", tags=["health"])
    def api_healthz():
        return {"status": "ok"}

    @api.get("", tags=["meta"])
    def api_root():
        return {"message": "Tennis Championship API. See /docs."}

    v0 = APIRouter(prefix="/v0")
    for module in (auth, players, tournaments, groups, matches, rankings):
        v0.include_router(module.router)
    api.include_router(v0)
    return api


app = FastAPI(title="Tennis Championship API", version="0.1.0")

app.state.limiter = auth.limiter
app.add_exception_handler(RateLimitExceeded, auth.rate_limit_handler)
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/healthz", tags=["health"])  # unprefixed for uptime probes
def root_healthz():
    return {"status": "ok"}


app.include_router(_build_api_router())
logger.info("Serving API under %r", API_PREFIX)
