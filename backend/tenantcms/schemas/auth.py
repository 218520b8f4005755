from pydantic import EmailStr, Field

from .base import RequestModel


class RegisterRequest(RequestModel):
    email: EmailStr
    password: str = Field(min_length=8)
    first_name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)
    tenant_name: str = Field(min_length=1, max_length=255)
    tenant_domain: str = Field(min_length=1, max_length=255)


class LoginRequest(RequestModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RefreshRequest(RequestModel):
    refresh_token: str = Field(min_length=1)
