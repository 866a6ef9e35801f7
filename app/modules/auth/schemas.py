from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: Optional[str] = None


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    message: str


class CurrentUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    onboarding_completed: bool = False
    user_metadata: dict = {}
    app_metadata: dict = {}
    is_admin: bool = False
