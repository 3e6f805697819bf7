"""Authentication use cases."""

from .common import UserInfo
from .federated_login import (
    CompleteFederatedLoginRequest,
    CompleteFederatedLoginResponse,
    CompleteFederatedLoginUseCase,
    InitiateFederatedLoginRequest,
    InitiateFederatedLoginResponse,
    InitiateFederatedLoginUseCase,
)
from .get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from .login import LoginRequest, LoginResponse, LoginUseCase
from .password_reset import (
    ConfirmPasswordResetRequest,
    ConfirmPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    RequestPasswordResetRequest,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
)
from .signup import SignupRequest, SignupResponse, SignupUseCase

__all__ = [
    "UserInfo",
    "SignupRequest",
    "SignupResponse",
    "SignupUseCase",
    "LoginRequest",
    "LoginResponse",
    "LoginUseCase",
    "InitiateFederatedLoginRequest",
    "InitiateFederatedLoginResponse",
    "InitiateFederatedLoginUseCase",
    "CompleteFederatedLoginRequest",
    "CompleteFederatedLoginResponse",
    "CompleteFederatedLoginUseCase",
    "GetCurrentUserRequest",
    "GetCurrentUserResponse",
    "GetCurrentUserUseCase",
    "RequestPasswordResetRequest",
    "RequestPasswordResetResponse",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetRequest",
    "ConfirmPasswordResetResponse",
    "ConfirmPasswordResetUseCase",
]
