from typing import Any, Optional

from fastapi import Header

from ..exceptions import http_problem
from .auth import decode_token, extract_bearer_token


async def require_admin(authorization: Optional[str] = Header(None)) -> dict[str, Any]:
    """Dependency guarding write endpoints; returns the decoded token claims."""

    claims = decode_token(extract_bearer_token(authorization))
    if claims.get("is_admin") is not True:
        raise http_problem(403, "admin privileges required", "admin_forbidden")
    return claims
