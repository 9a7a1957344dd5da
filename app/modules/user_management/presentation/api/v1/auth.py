# 📄 File: app/modules/user_management/presentation/api/v1/auth.py
# 🧭 Purpose (Layman Explanation):
# The web addresses people use to create an account, sign in, sign in through another
# provider, and see who they are signed in as.
#
# 🧪 Purpose (Technical Summary):
# FastAPI authentication endpoints with slowapi rate limiting, delegating to AuthService
# and rendering the response envelope.
#
# 🔗 Dependencies:
# - FastAPI router, slowapi limiter
# - app.modules.user_management.domain.services.auth_service
# - app.modules.user_management.presentation.api.schemas.auth_schemas
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted at /auth)

"""
Authentication API Endpoints

Endpoints:
- POST /signup: Register and receive a token (201)
- POST /signin: Username-or-email + password (200)
- POST /oauth: Federated login, provisions the account on first use (200/201)
- GET /me: Current user
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.core.dependencies import CurrentUser, get_notifier
from app.shared.core.rate_limiter import auth_rate_limit, limiter
from app.shared.core.responses import success_response
from app.shared.events.notifier import EventNotifier
from app.shared.infrastructure.database.session import get_db_session

from ....domain.services.auth_service import AuthService
from ...dependencies import get_current_user
from ..schemas.auth_schemas import OAuthRequest, SigninRequest, SignupRequest

logger = logging.getLogger(__name__)

auth_router = APIRouter()


def get_auth_service(
    db: AsyncSession = Depends(get_db_session),
    notifier: EventNotifier = Depends(get_notifier),
) -> AuthService:
    return AuthService(db, notifier)


@auth_router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User created, token issued"},
        404: {"description": "Default user role missing"},
        409: {"description": "Username or email already exists"},
    },
)
@limiter.limit(auth_rate_limit)
async def signup(
    request: Request,
    payload: SignupRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Create an account in the ``user`` role and return ``{user, token}``."""
    result = await service.signup(payload.model_dump())
    return success_response("User created successfully", result, status.HTTP_201_CREATED)


@auth_router.post("/signin", summary="Sign in with username or email")
@limiter.limit(auth_rate_limit)
async def signin(
    request: Request,
    payload: SigninRequest,
    service: AuthService = Depends(get_auth_service),
):
    result = await service.signin(payload.username_or_email, payload.password)
    return success_response("User signed in successfully", result)


@auth_router.post("/oauth", summary="Federated sign-in")
@limiter.limit(auth_rate_limit)
async def oauth(
    request: Request,
    payload: OAuthRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Sign in an existing account by email, or provision one.

    Returns 201 when an account was created, 200 otherwise.
    """
    result, created = await service.oauth(payload.email, payload.username, payload.name)
    if created:
        return success_response("User signed up successfully", result, status.HTTP_201_CREATED)
    return success_response("User signed in successfully", result)


@auth_router.get("/me", summary="Current user")
async def me(
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return success_response("User fetched successfully", await service.me(current_user))
