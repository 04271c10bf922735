"""
FitTrack API - Authentication Schemas.

Pydantic schemas for authentication requests and responses.
"""

from pydantic import BaseModel, EmailStr, Field, ConfigDict


class RegisterRequest(BaseModel):
    """
    Schema for user registration request.

    Attributes:
        email: User's email address.
        password: User's password.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123"
            }
        }
    )

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class LoginRequest(BaseModel):
    """
    Schema for user login request.

    Attributes:
        email: User's email address.
        password: User's password.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123"
            }
        }
    )

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class TokenResponse(BaseModel):
    """
    Schema for authentication token response.

    The token payload carries the user's id under ``id``; clients decode it
    for display only.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."
            }
        }
    )

    access: str = Field(..., description="JWT access token")


class UserDetailsResponse(BaseModel):
    """Authenticated user's profile."""

    id: str
    email: str
