"""
Auth Schemas for registration, login and account management
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class CredentialsRequest(BaseModel):
    """Request schema for register and login. Empty values are rejected by the service."""
    email: str = ""
    password: str = ""


class RegisterResponse(BaseModel):
    email: str
    reactivated: bool = False


class TokenResponse(BaseModel):
    """Response schema for login"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds
    expires_at: datetime


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    old_password: str = Field("", alias="oldPassword")
    new_password: str = Field("", alias="newPassword")


class CurrentUser(BaseModel):
    """Identity resolved by the auth gate from a session token"""
    email: str


class Identity(BaseModel):
    """Verified identity returned by the credential service"""
    model_config = ConfigDict(from_attributes=True)

    u_id: int
    u_email: str
    u_created_at: Optional[datetime] = None
