"""
Auth API endpoints
"""

from fastapi import APIRouter, Depends

from api.schemas import AuthResponse, LoginRequest, ProfileResponse, RegisterRequest, UserSchema
from api.shared import get_auth_service, get_current_user_id
from services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post("/auth/register",
             response_model=AuthResponse,
             summary="Register a new user")
async def register(
    request: RegisterRequest,
    auth: AuthService = Depends(get_auth_service),
):
    """
    Create an account and return it with an identity token.

    Fails with 409 Conflict when the email is already registered.
    """
    user, token = await auth.register(request.name, request.email, request.password)
    return AuthResponse(user=UserSchema.from_model(user), token=token)


@router.post("/auth/login",
             response_model=AuthResponse,
             summary="Log in with email and password")
async def login(
    request: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
):
    """
    Unknown email and wrong password both return the same InvalidCredentials error.
    """
    user, token = await auth.login(request.email, request.password)
    return AuthResponse(user=UserSchema.from_model(user), token=token)


@router.get("/user/profile",
            response_model=ProfileResponse,
            summary="Profile of the authenticated user")
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    auth: AuthService = Depends(get_auth_service),
):
    user = await auth.get_profile(user_id)
    return ProfileResponse(user=UserSchema.from_model(user))
