"""
Authentication Use Case DTOs (Data Transfer Objects)

Command and Response classes for the auth domain.
"""

from typing import Optional
from pydantic import BaseModel


class SignupCommand(BaseModel):
    """
    Signup command - represents validated signup intent

    Created by API layer after request validation passes.
    """

    email: str
    password: str
    full_name: Optional[str] = None


class UserInfo(BaseModel):
    """User information in auth responses"""

    id: str
    email: str
    full_name: Optional[str] = None


class SignupResponse(BaseModel):
    """Response for user signup use case"""

    user: UserInfo


class LoginResponse(BaseModel):
    """Response for user login use case"""

    access_token: str
    session_id: str
    user_id: str
    is_admin: bool


class LogoutResponse(BaseModel):
    """Response for sign-out use case"""

    status: str
    message: str
