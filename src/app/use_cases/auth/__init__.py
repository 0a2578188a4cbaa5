"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .change_password_use_case import ChangePasswordUseCase
from .get_profile_use_case import GetProfileUseCase
from .update_profile_use_case import UpdateProfileUseCase
from .token_pair import SessionLimit, enforce_session_limit, open_session
from .dtos import RegisterCommand, UpdateProfileCommand, AccountProfile, AuthResponse

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "ChangePasswordUseCase",
    "GetProfileUseCase",
    "UpdateProfileUseCase",
    # Session issuance
    "SessionLimit",
    "enforce_session_limit",
    "open_session",
    # DTOs - Commands
    "RegisterCommand",
    "UpdateProfileCommand",
    # DTOs - Responses
    "AccountProfile",
    "AuthResponse",
]
