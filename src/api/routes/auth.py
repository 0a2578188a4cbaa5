from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.app.services.token_issuer import AccessTokenClaims, TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AccountProfile,
    AuthResponse,
    ChangePasswordUseCase,
    GetProfileUseCase,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    UpdateProfileCommand,
    UpdateProfileUseCase,
)
from src.depends import (
    get_current_account,
    get_device_meta,
    get_token_issuer,
    get_unit_of_work,
)
from src.domain.device import DeviceMeta

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    Password policy is enforced by the credential store, not here.
    """

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., min_length=1, description="Account password")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    issuer: TokenIssuer = Depends(get_token_issuer),
    device: DeviceMeta = Depends(get_device_meta),
):
    """
    Register

    Creates an account and returns an access token and a refresh token.

    Raises:
        - 409 Conflict: Email already exists
        - 400 Bad Request: Invalid input or password rejected by policy
    """
    command = RegisterCommand(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password=request.password,
    )
    return await RegisterUseCase(uow, issuer).execute(command, device)


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    issuer: TokenIssuer = Depends(get_token_issuer),
    device: DeviceMeta = Depends(get_device_meta),
):
    """
    Login

    Raises:
        - 401 Unauthorized: Invalid credentials or deactivated account
        - 409 Conflict: Session limit reached (reject policy only)
    """
    return await LoginUseCase(uow, issuer).execute(request.email, request.password, device)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def refresh(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    issuer: TokenIssuer = Depends(get_token_issuer),
    device: DeviceMeta = Depends(get_device_meta),
):
    """
    Refresh Tokens

    Rotates the refresh token: the presented one is revoked and a new pair is
    issued. A refresh token can be used exactly once.

    Raises:
        - 401 Unauthorized: Unknown, revoked, expired or already rotated token
    """
    return await RefreshTokenUseCase(uow, issuer).execute(request.refresh_token, device)


class LogoutRequest(BaseModel):
    refresh_token: Optional[str] = Field(None, description="Refresh token of the session to end")


class MessageResponse(BaseModel):
    message: str


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout(
    request: LogoutRequest,
    current: AccessTokenClaims = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    device: DeviceMeta = Depends(get_device_meta),
):
    """Logout. Always succeeds for an authenticated caller."""
    await LogoutUseCase(uow).execute(current.account_id, request.refresh_token, device)
    return MessageResponse(message="Logged out")


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class ChangePasswordResponse(BaseModel):
    message: str
    sessions_revoked: int


@router.post(
    "/change-password", status_code=status.HTTP_200_OK, response_model=ChangePasswordResponse
)
async def change_password(
    request: ChangePasswordRequest,
    current: AccessTokenClaims = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    device: DeviceMeta = Depends(get_device_meta),
):
    """
    Change Password

    Every session of the account is revoked; the client must log in again.

    Raises:
        - 400 Bad Request: Wrong current password or new password rejected
    """
    revoked = await ChangePasswordUseCase(uow).execute(
        current.account_id, request.current_password, request.new_password, device
    )
    return ChangePasswordResponse(message="Password changed", sessions_revoked=revoked)


@router.get("/me", status_code=status.HTTP_200_OK, response_model=AccountProfile)
async def me(
    current: AccessTokenClaims = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await GetProfileUseCase(uow).execute(current.account_id)


class UpdateProfileRequest(BaseModel):
    """Omitted fields are left unchanged; an empty department or avatar clears it"""

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    avatar: Optional[str] = Field(None, max_length=255)

    def to_command(self) -> UpdateProfileCommand:
        return UpdateProfileCommand(**self.model_dump(exclude_unset=True))


@router.put("/me", status_code=status.HTTP_200_OK, response_model=AccountProfile)
async def update_me(
    request: UpdateProfileRequest,
    current: AccessTokenClaims = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    device: DeviceMeta = Depends(get_device_meta),
):
    """
    Update Profile

    Raises:
        - 400 Bad Request: First or last name set to an empty value
    """
    return await UpdateProfileUseCase(uow).execute(
        current.account_id, request.to_command(), device
    )
