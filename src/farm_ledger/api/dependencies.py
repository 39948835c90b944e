"""Shared API dependencies for authentication, rate limiting and filtering."""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from farm_ledger.core.errors import InvalidFilterError
from farm_ledger.core.tokens import (
    INVALID_TOKEN_DETAIL,
    InvalidTokenError,
    TokenClaims,
    decode_access_token,
)
from farm_ledger.db.session import get_db
from farm_ledger.services.query_builder import ReportFilter
from farm_ledger.services.rate_limit import (
    AUTH_BUCKET,
    AUTH_LIMIT_MESSAGE,
    GENERAL_BUCKET,
    GENERAL_LIMIT_MESSAGE,
)
from farm_ledger.services.runtime import RuntimeState

logger = logging.getLogger(__name__)

# HTTP Bearer scheme; a missing header is reported by get_current_claims.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_runtime_state(request: Request) -> RuntimeState:
    """Return the process-wide runtime state created at startup."""
    return request.app.state.runtime


RuntimeStateDep = Annotated[RuntimeState, Depends(get_runtime_state)]


def client_address(request: Request) -> str:
    """Return the client's address used as the rate-limit key."""
    return request.client.host if request.client else "unknown"


def _enforce_rate_limit(request: Request, state: RuntimeState, bucket: str, message: str) -> None:
    if not state.rate_limit_enabled:
        return
    client = client_address(request)
    decision = state.rate_limiter.hit(client, bucket)
    if not decision.allowed:
        logger.warning(
            "Rate limit exceeded for %s on %s (bucket=%s)", client, request.url.path, bucket
        )
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=message,
            headers={"Retry-After": str(decision.retry_after)},
        )


def api_rate_limit(request: Request, state: RuntimeStateDep) -> None:
    """Apply the general bucket (100 requests per window) to every API route."""
    _enforce_rate_limit(request, state, GENERAL_BUCKET, GENERAL_LIMIT_MESSAGE)


def auth_rate_limit(request: Request, state: RuntimeStateDep) -> None:
    """Apply the auth bucket (5 attempts per window) to login and signup."""
    _enforce_rate_limit(request, state, AUTH_BUCKET, AUTH_LIMIT_MESSAGE)


def get_current_claims(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenClaims:
    """Verify the bearer token and return its claims.

    Raises:
        HTTPException: 401 when no token is supplied, 403 when it is invalid
            or expired.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = credentials.credentials
    try:
        return decode_access_token(token)
    except InvalidTokenError as err:
        logger.warning(
            "Invalid token attempt from %s (token prefix %s)",
            client_address(request),
            token[:10],
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=INVALID_TOKEN_DETAIL,
        ) from err


# Type alias for current user dependency
CurrentClaimsDep = Annotated[TokenClaims, Depends(get_current_claims)]


def get_report_filter(
    project: Annotated[str | None, Query(description="Project name or 'All Projects'")] = None,
    from_date: Annotated[str | None, Query(alias="fromDate", description="Inclusive start date")] = None,
    to_date: Annotated[str | None, Query(alias="toDate", description="Inclusive end date")] = None,
) -> ReportFilter:
    """Parse the optional project / date-range query parameters."""
    try:
        return ReportFilter.from_query(project, from_date, to_date)
    except InvalidFilterError as err:
        raise RequestValidationError(
            [
                {
                    "type": "iso_date",
                    "loc": ("query", err.field),
                    "msg": err.detail,
                    "input": from_date if err.field == "fromDate" else to_date,
                }
            ]
        ) from err


ReportFilterDep = Annotated[ReportFilter, Depends(get_report_filter)]
