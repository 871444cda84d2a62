"""
Pydantic models for user accounts.

Accounts are identified by a unique ``login``.  Once referenced by a
ticket an account is treated as read-only by the booking core.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .keys import ROW_ID_MAX, ROW_ID_MIN


class UserBase(BaseModel):
    login: str = Field(..., min_length=1, examples=["alice"])
    full_name: Optional[str] = Field(None, examples=["Alice Smith"])
    is_admin: bool = Field(False, examples=[False])


class UserCreate(UserBase):
    """Schema for provisioning a user."""
    pass


class User(UserBase):
    """A stored user account."""

    id: int = Field(..., ge=ROW_ID_MIN, le=ROW_ID_MAX)

    model_config = {
        "from_attributes": True,
    }
