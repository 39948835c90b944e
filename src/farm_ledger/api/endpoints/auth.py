# src/farm_ledger/api/endpoints/auth.py
"""Authentication endpoints: signup, login, TOTP and login activity."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from farm_ledger.api.dependencies import RuntimeStateDep, SessionDep, auth_rate_limit
from farm_ledger.core.errors import (
    TwoFactorNotConfiguredError,
    UsernameTakenError,
    UserNotFoundError,
)
from farm_ledger.core.security import verify_password
from farm_ledger.core.tokens import create_access_token
from farm_ledger.models import ROLE_USER
from farm_ledger.repositories.credential_store import CredentialStore
from farm_ledger.schemas.user import (
    AuthResponse,
    LoginActivityEntry,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    TwoFactorSetupRequest,
    TwoFactorSetupResponse,
    TwoFactorVerifyRequest,
    TwoFactorVerifyResponse,
)
from farm_ledger.services.two_factor import TwoFactorService, get_two_factor_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"])

INVALID_CREDENTIALS = "Invalid username or password"


def get_two_factor_service_dep() -> TwoFactorService:
    return get_two_factor_service()


TwoFactorServiceDep = Annotated[TwoFactorService, Depends(get_two_factor_service_dep)]


@router.post(
    "/signup",
    summary="Create a standard user account",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    dependencies=[Depends(auth_rate_limit)],
)
def signup(payload: SignupRequest, db: SessionDep) -> AuthResponse:
    """Register a new user and return a bearer token for it."""
    store = CredentialStore(db)
    try:
        user = store.create(
            username=payload.username,
            password=payload.password,
            role=ROLE_USER,
            email=payload.email,
            display_name=payload.display_name,
        )
    except UsernameTakenError as err:
        logger.info("Signup rejected: username %s already exists", payload.username)
        raise HTTPException(status_code=err.status_code, detail=err.detail) from err

    logger.info("User registered: %s (id=%s)", user.username, user.id)
    token = create_access_token(user.id, user.username, user.role)
    return AuthResponse(id=user.id, username=user.username, role=user.role, token=token)


@router.post(
    "/login",
    summary="Authenticate with username and password",
    response_model=LoginResponse,
    dependencies=[Depends(auth_rate_limit)],
)
def login(payload: LoginRequest, db: SessionDep, state: RuntimeStateDep) -> LoginResponse:
    """Check credentials, record the attempt and issue a bearer token."""
    user = CredentialStore(db).find_by_username(payload.username)
    if user is None or not verify_password(payload.password, user.password_hash):
        state.login_activity.record(payload.username, "fail")
        logger.warning("Login failed for user: %s", payload.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
        )

    state.login_activity.record(user.username, "success")
    logger.info("User logged in: %s (id=%s)", user.username, user.id)
    token = create_access_token(user.id, user.username, user.role)
    return LoginResponse(
        id=user.id,
        username=user.username,
        role=user.role,
        two_fa=user.two_fa_enabled,
        token=token,
    )


@router.post(
    "/2fa/setup",
    summary="Provision a TOTP secret for a user",
    response_model=TwoFactorSetupResponse,
)
def setup_two_factor(
    payload: TwoFactorSetupRequest,
    db: SessionDep,
    two_factor: TwoFactorServiceDep,
) -> TwoFactorSetupResponse:
    """Generate and store a new TOTP secret, replacing any previous one."""
    store = CredentialStore(db)
    if store.find_by_username(payload.username) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=UserNotFoundError.detail,
        )

    provisioning = two_factor.provision(payload.username)
    try:
        store.set_two_factor_secret(payload.username, provisioning.secret)
    except UserNotFoundError as err:  # pragma: no cover - deleted concurrently
        raise HTTPException(status_code=err.status_code, detail=err.detail) from err

    logger.info("2FA secret provisioned for %s", payload.username)
    return TwoFactorSetupResponse(
        otpauth_url=provisioning.otpauth_url,
        qr=provisioning.qr_data_url,
        secret=provisioning.secret,
    )


@router.post(
    "/2fa/verify",
    summary="Check a TOTP code",
    response_model=TwoFactorVerifyResponse,
)
def verify_two_factor(
    payload: TwoFactorVerifyRequest,
    db: SessionDep,
    two_factor: TwoFactorServiceDep,
) -> TwoFactorVerifyResponse:
    """Report whether the submitted code matches the user's TOTP secret."""
    user = CredentialStore(db).find_by_username(payload.username)
    if user is None or not user.two_fa_secret:
        err = TwoFactorNotConfiguredError()
        raise HTTPException(status_code=err.status_code, detail=err.detail)

    return TwoFactorVerifyResponse(verified=two_factor.verify(user.two_fa_secret, payload.token))


@router.get(
    "/login-activity",
    summary="Recent login attempts",
    response_model=list[LoginActivityEntry],
)
def login_activity(state: RuntimeStateDep) -> list[dict[str, str]]:
    """Return up to the last 100 login attempts, newest first."""
    return state.login_activity.recent()
