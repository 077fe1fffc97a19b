# routes_auth.py
from fastapi import APIRouter, Depends, status

from auth_service import AuthService
from config import ACCESS_TOKEN_EXPIRES_IN
from dependencies import get_auth_service, get_current_user
from schemas import AuthResponse, CurrentUser, LoginRequest, ProfileResponse, RegisterRequest, UserOut

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)):
    """
    Registers a new IMF agent. The requested role is never honoured.
    """
    user, token = await auth_service.register(payload.email, payload.password, payload.role)
    return AuthResponse(
        message="Agent registered successfully",
        user=UserOut.model_validate(user),
        token=token,
        expires_in=ACCESS_TOKEN_EXPIRES_IN,
    )


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    user, token = await auth_service.login(payload.email, payload.password)
    return AuthResponse(
        message="Login successful",
        user=UserOut.model_validate(user),
        token=token,
        expires_in=ACCESS_TOKEN_EXPIRES_IN,
    )


@router.get("/profile", response_model=ProfileResponse)
async def profile(
    current_user: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    user = await auth_service.get_profile(current_user.id)
    return ProfileResponse(message="Profile retrieved successfully", user=UserOut.model_validate(user))
