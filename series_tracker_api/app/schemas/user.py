"""
Pydantic models for user registration and login.

Passwords only ever travel inwards: ``UserRead`` carries the identity
returned by both registration and login and never includes the hash.
"""

from pydantic import BaseModel, Field


class RegisterInput(BaseModel):
    """Schema for registering a user."""

    name: str = Field("", examples=["Maria Silva"])
    email: str = Field("", examples=["maria@example.com"])
    password: str = Field("", examples=["strongpassword"])


class LoginInput(BaseModel):
    email: str = Field("", examples=["maria@example.com"])
    password: str = Field("", examples=["strongpassword"])


class UserRead(BaseModel):
    """Identity returned after registration or a successful login."""

    id: int
    name: str
    email: str

    model_config = {
        "from_attributes": True,
    }
