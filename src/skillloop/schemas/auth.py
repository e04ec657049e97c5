"""Pydantic schemas for signup and login."""

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """Incoming payload for creating an account."""

    name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: str
    password: str
