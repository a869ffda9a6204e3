"""
Pydantic models for user data.

Defines schemas for registering users, logging in and reading user
information.  Passwords are never returned through the API.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Principal(BaseModel):
    """The authenticated identity making a request."""

    id: int
    username: str


class RegisterUserModel(BaseModel):
    """Schema for registering a user.

    Every field is optional at the schema level so that missing values
    reach the registration validator, which reports all of them at once.
    """

    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = Field(None, examples=["maria"])
    email: Optional[str] = Field(None, examples=["maria@mail.com"])
    password: Optional[str] = Field(None, examples=["123456"])
    confirm_password: Optional[str] = Field(None, alias="confirmPassword", examples=["123456"])
    first_name: Optional[str] = Field(None, alias="firstName", examples=["Maria"])
    last_name: Optional[str] = Field(None, alias="lastName", examples=["Green"])


class LoginModel(BaseModel):
    username: Optional[str] = Field(None, examples=["maria"])
    password: Optional[str] = Field(None, examples=["123456"])


class TokenRead(BaseModel):
    token: str
    expiration: datetime


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    username: str
    email: str
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
