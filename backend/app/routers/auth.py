"""Admin login plus the token and password helpers behind it.

A single administrator account is configured through ``ADMIN_USERNAME`` and
``ADMIN_PASSWORD_HASH`` (a bcrypt hash). A successful login returns a short
lived HS256 JWT carrying ``is_admin=True`` which every mutating endpoint
requires (see :mod:`app.routers.admin`).
"""

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
import jwt
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from ..config import admin_password_hash, admin_username
from ..exceptions import ProblemDetail, http_problem
from ..schemas import AdminLogin, TokenOut

logger = logging.getLogger(__name__)

JWT_ALG = "HS256"
JWT_EXPIRE_SECONDS = 3600
LOGIN_RATE_LIMIT = "5/minute"

_WEAK_SECRETS = {"secret", "changeme", "default", "password"}


def get_jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise RuntimeError("JWT_SECRET environment variable is required")
    if len(secret) < 32 or secret.lower() in _WEAK_SECRETS:
        raise RuntimeError(
            "JWT_SECRET must be at least 32 characters and not a well-known value"
        )
    return secret


# -----------------------------------------------------------------------------
# Passwords
# -----------------------------------------------------------------------------
def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: Optional[str]) -> bool:
    """Check ``password`` against a bcrypt hash; malformed hashes never match."""

    if not hashed or not isinstance(password, str):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


# -----------------------------------------------------------------------------
# Tokens
# -----------------------------------------------------------------------------
def create_token(username: str, *, now: Optional[datetime] = None) -> str:
    issued = now or datetime.now(timezone.utc)
    claims = {
        "sub": username,
        "is_admin": True,
        "iat": issued,
        "exp": issued + timedelta(seconds=JWT_EXPIRE_SECONDS),
    }
    return jwt.encode(claims, get_jwt_secret(), algorithm=JWT_ALG)


def extract_bearer_token(authorization: Optional[str]) -> str:
    scheme, _, token = (authorization or "").partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise http_problem(401, "missing token", "auth_missing_token")
    return token


def decode_token(token: str) -> dict[str, Any]:
    try:
        return jwt.decode(token, get_jwt_secret(), algorithms=[JWT_ALG])
    except jwt.ExpiredSignatureError:
        raise http_problem(401, "token expired", "auth_token_expired")
    except jwt.PyJWTError:
        raise http_problem(401, "invalid token", "auth_invalid_token")


# -----------------------------------------------------------------------------
# Rate limiting
# -----------------------------------------------------------------------------
def client_ip(request: Request) -> str:
    """Key requests by the nearest proxy hop, falling back to the peer address."""

    hops = [h.strip() for h in request.headers.get("X-Forwarded-For", "").split(",")]
    hops = [h for h in hops if h]
    if hops:
        return hops[-1]
    return request.headers.get("X-Real-IP") or (
        request.client.host if request.client else ""
    )


def login_rate_limit() -> str:
    if (os.getenv("DISABLE_AUTH_RATE_LIMITS") or "").lower() == "true":
        return "1000/second"
    return LOGIN_RATE_LIMIT


limiter = Limiter(key_func=client_ip)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    limit = exc.detail if isinstance(exc.detail, str) and exc.detail else None
    logger.warning("Rate limit hit on %s from %s", request.url.path, client_ip(request))
    problem = ProblemDetail(
        title="Too Many Requests",
        status=429,
        code="rate_limit_exceeded",
        detail=f"rate limit exceeded: {limit}" if limit else "rate limit exceeded",
    )
    return JSONResponse(
        status_code=429,
        content=problem.model_dump(),
        media_type="application/problem+json",
    )


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------
router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login", response_model=TokenOut)
@limiter.limit(login_rate_limit)
async def login(request: Request, body: AdminLogin):
    username = body.username.strip().lower()
    expected_hash = admin_password_hash()
    if expected_hash is None:
        logger.warning("ADMIN_PASSWORD_HASH is not configured; admin login disabled")

    if username != admin_username() or not verify_password(body.password, expected_hash):
        logger.info("Rejected admin login for %r", username)
        raise http_problem(401, "invalid credentials", "auth_invalid_credentials")

    logger.info("Admin %r logged in", username)
    return TokenOut(access_token=create_token(username))
