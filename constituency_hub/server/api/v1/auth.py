"""
Authentication Endpoints.

Staff sign in with email and password and receive a bearer token for the
``/admin`` endpoints.
"""

from fastapi import APIRouter

from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.users import LoginRequest, TokenResponse, UserRead
from constituency_hub.server.services.deps import CurrentUser, SessionDep
from constituency_hub.server.services.users import UserService

router = APIRouter()


@router.post(
    "/login",
    response_model=Envelope[TokenResponse],
    summary="Sign In",
    description="Exchange email and password for a bearer access token.",
    responses={401: {"description": "Invalid email or password"}},
)
async def login(credentials: LoginRequest, session: SessionDep) -> Envelope[TokenResponse]:
    """
    Sign in.

    - **email**: Account email (case-insensitive)
    - **password**: Account password
    """
    return ok(await UserService(session).login(credentials))


@router.get(
    "/me",
    response_model=Envelope[UserRead],
    summary="Current User",
    description="Return the account the bearer token belongs to.",
    responses={401: {"description": "Missing or invalid token"}},
)
async def me(user: CurrentUser) -> Envelope[UserRead]:
    return ok(UserRead.model_validate(user))
