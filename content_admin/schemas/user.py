from typing import Optional

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    email: Optional[str] = Field(None, description="Account email, matched case-insensitively.")
    password: Optional[str] = None


class TokenUser(BaseModel):
    """Identity carried inside an access token."""

    id: int
    email: str
    role: str


class LoginResponse(BaseModel):
    token: str
    user: TokenUser


class RegisterResponse(BaseModel):
    success: bool = True
    message: str
    userId: int
