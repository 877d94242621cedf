"""
Pydantic models for admin authentication
"""
from pydantic import BaseModel
from typing import Optional


class LoginRequest(BaseModel):
    """Login body. Fields are optional so missing values map to a 400."""
    email: Optional[str] = None
    password: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    """Password reset body"""
    email: Optional[str] = None
    newPassword: Optional[str] = None


class AdminInfo(BaseModel):
    """Administrator data returned after login (without password)"""
    id: int
    email: str
    name: str

    class Config:
        from_attributes = True
