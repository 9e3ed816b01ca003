from typing import Optional

from fastapi import HTTPException
from pydantic import BaseModel


class ProblemDetail(BaseModel):
    """Error body in the RFC 7807 ``application/problem+json`` shape.

    ``code`` is a stable machine-readable identifier clients can branch on;
    ``title`` and ``detail`` are meant for humans and may change.
    """

    type: str = "about:blank"
    title: str
    status: int
    code: str
    detail: Optional[str] = None
    instance: Optional[str] = None


class DomainException(Exception):
    """Error raised by route handlers that maps directly onto a problem body."""

    status_code = 400
    title = "Bad request"
    code = "bad_request"

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(detail or self.title)
        self.detail = detail
        self.type = "about:blank"

    def to_problem(self) -> ProblemDetail:
        return ProblemDetail(
            type=self.type,
            title=self.title,
            status=self.status_code,
            code=self.code,
            detail=self.detail,
        )


class ResourceNotFound(DomainException):
    status_code = 404
    resource = "resource"

    def __init__(self, resource_id: str) -> None:
        self.resource_id = resource_id
        super().__init__(f"{self.resource} '{resource_id}' not found")

    @property
    def title(self) -> str:
        return f"{self.resource.capitalize()} not found"

    @property
    def code(self) -> str:
        return f"{self.resource}_not_found"


class PlayerNotFound(ResourceNotFound):
    resource = "player"


class TournamentNotFound(ResourceNotFound):
    resource = "tournament"


class GroupNotFound(ResourceNotFound):
    resource = "group"


class MatchNotFound(ResourceNotFound):
    resource = "match"


def http_problem(
    status_code: int,
    detail: str,
    code: str,
    *,
    headers: Optional[dict[str, str]] = None,
) -> HTTPException:
    """Build an ``HTTPException`` tagged with a problem ``code``."""

    exc = HTTPException(status_code=status_code, detail=detail, headers=headers)
    exc.code = code
    return exc
