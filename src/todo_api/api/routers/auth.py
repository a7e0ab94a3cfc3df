"""Routes handling user authentication flows."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...deps import CurrentPrincipalDependency, DatabaseSessionDependency, SettingsDependency
from ...errors import UnauthorizedError
from ...schemas import LoginRequest, LoginResponse, RegisterRequest, UserPublic
from ...services import AuthService, UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
async def register(
    payload: RegisterRequest,
    session: DatabaseSessionDependency,
    settings: SettingsDependency,
) -> UserPublic:
    service = AuthService(session, settings)
    user = await service.register_user(
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    return UserPublic.model_validate(user)


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Authenticate using email and password",
)
async def login(
    payload: LoginRequest,
    session: DatabaseSessionDependency,
    settings: SettingsDependency,
) -> LoginResponse:
    service = AuthService(session, settings)
    user, token = await service.login(payload.email, payload.password)
    return LoginResponse(
        token=token.value,
        expires_in=token.expires_in,
        user=UserPublic.model_validate(user),
    )


@router.get(
    "/profile",
    response_model=UserPublic,
    summary="Return the authenticated user's profile",
)
async def read_profile(
    principal: CurrentPrincipalDependency,
    session: DatabaseSessionDependency,
) -> UserPublic:
    user = await UserService(session).get_user(principal.id)
    if user is None:  # pragma: no cover - removed after the token was checked
        raise UnauthorizedError("Invalid token")
    return UserPublic.model_validate(user)
