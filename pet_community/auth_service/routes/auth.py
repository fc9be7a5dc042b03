"""
Auth routes - register, login, logout, token refresh and profile.

Route prefix: /api/auth
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import AuthenticatedUser, authenticate, get_auth_service
from ..schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    ProfileUpdate,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
)
from ..service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    user, token = service.create_user(
        email=payload.email,
        password=payload.password,
        name=payload.name,
        phone=payload.phone,
        role=payload.role,
    )
    return AuthResponse(message="Registration successful", user=user, token=token)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)):
    user, token = service.login_user(payload.email, payload.password)
    return AuthResponse(message="Login successful", user=user, token=token)


@router.post("/logout", response_model=MessageResponse)
def logout(user: AuthenticatedUser = Depends(authenticate)):
    # Tokens are stateless; the client discards its copy
    logger.info("Logout: user_id=%s", user.id)
    return MessageResponse(message="Logout successful")


@router.post("/refresh-token", response_model=TokenResponse)
def refresh_token(payload: RefreshTokenRequest):
    if not payload.token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token must not be empty")

    # TODO: move token rotation into AuthService once refresh semantics are decided
    return TokenResponse(message="Token refreshed", token="new_token_here")


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    user: AuthenticatedUser = Depends(authenticate),
    service: AuthService = Depends(get_auth_service),
):
    profile = service.get_user_by_id(user.id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User does not exist")
    return ProfileResponse(message="Profile fetched", user=profile)


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    payload: ProfileUpdate,
    user: AuthenticatedUser = Depends(authenticate),
    service: AuthService = Depends(get_auth_service),
):
    profile = service.update_user(user.id, payload.model_dump(exclude_unset=True))
    return ProfileResponse(message="Profile updated", user=profile)
