# Auth router
# - register: POST /api/v1/auth/register
# - login:    POST /api/v1/auth/login
# - profile:  GET  /api/v1/auth/getUser (Bearer token required)

from fastapi import APIRouter, Depends, status

from ...core.exceptions import internal_errors
from ...core.security import get_current_user
from ...models.user import User
from ...schemas.user_schema import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from ...services.auth_service import AuthService, get_auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register (duplicate email check included)",
)
async def register(payload: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    with internal_errors("Error registering user"):
        user, token = await service.register(
            payload.full_name, payload.email, payload.password, payload.profile_image_url
        )
    return AuthResponse(id=str(user.id), user=UserPublic.from_document(user), token=token)


@router.post("/login", response_model=AuthResponse, summary="Login (issues an access token)")
async def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)):
    with internal_errors("Error logging in"):
        user, token = await service.login(payload.email, payload.password)
    return AuthResponse(id=str(user.id), user=UserPublic.from_document(user), token=token)


@router.get("/getUser", response_model=UserPublic, summary="Current user profile")
async def get_user(
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    with internal_errors("Error fetching user info"):
        user = await service.get_self(current_user.id)
    return UserPublic.from_document(user)
