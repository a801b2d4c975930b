"""
Authentication Use Cases
"""

from .dtos import (
    LoginResponse,
    LogoutResponse,
    SignupCommand,
    SignupResponse,
    UserInfo,
)
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .signup_use_case import SignupUseCase

__all__ = [
    "LoginUseCase",
    "LogoutUseCase",
    "SignupUseCase",
    "SignupCommand",
    "SignupResponse",
    "LoginResponse",
    "LogoutResponse",
    "UserInfo",
]
