from __future__ import annotations

from fastapi import APIRouter, Depends, status

from employee_api.core.access import Identity
from employee_api.core.deps import get_auth_service, get_current_user
from employee_api.schemas.auth import LoginData, LoginRequest, RegisterRequest, UserRead
from employee_api.schemas.common import ApiResponse, MessageResponse
from employee_api.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


# PUBLIC_INTERFACE
@router.post(
    "/login",
    response_model=ApiResponse[LoginData],
    summary="Login",
    description="Authenticate with username and password and receive a bearer token.",
)
def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse[LoginData]:
    """Authenticate user and issue an access token."""
    result = service.login(payload.username, payload.password)
    return ApiResponse[LoginData](
        message="Login successful",
        data=LoginData(token=result.token, user=UserRead.model_validate(result.user)),
    )


# PUBLIC_INTERFACE
@router.post(
    "/register",
    response_model=ApiResponse[UserRead],
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
    description="Create a new user. Username and email must not already be registered.",
)
def register(
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse[UserRead]:
    """Register a new user."""
    user = service.register(payload.model_dump())
    return ApiResponse[UserRead](
        message="User registered successfully",
        data=UserRead.model_validate(user),
    )


# PUBLIC_INTERFACE
@router.get(
    "/me",
    response_model=ApiResponse[UserRead],
    summary="Read current user",
    description="Return the profile of the user the bearer token was issued to.",
)
def read_current_user(
    user: Identity = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse[UserRead]:
    """Return current user profile."""
    return ApiResponse[UserRead](data=UserRead.model_validate(service.get_profile(user.id)))


# PUBLIC_INTERFACE
@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Logout",
    description="Stateless logout. Clients should discard the token; no server state is kept.",
)
def logout(user: Identity = Depends(get_current_user)) -> MessageResponse:
    """Acknowledge logout in stateless JWT systems."""
    return MessageResponse(message="Logout successful. Please remove token from client.")
