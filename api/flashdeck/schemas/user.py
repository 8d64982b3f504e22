"""
User schemas.
"""
from fastapi import Form
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class UserResponse(BaseModel):
    """User response schema."""
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserForm(BaseModel):
    """Form body for creating (name and email required) or updating a user."""
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def as_form(
        cls,
        name: Optional[str] = Form(None, max_length=100),
        email: Optional[str] = Form(None, max_length=100),
    ) -> "UserForm":
        return cls(name=name, email=email)
