"""
Admin authentication schemas.

Dependencies: pydantic
System role: Admin gate API contracts
"""

from pydantic import BaseModel, Field


class AuthRequest(BaseModel):
    """Password submitted by the admin page."""

    password: str = Field(description="Admin password")


class AuthResult(BaseModel):
    """Outcome of a successful gate check."""

    success: bool = False
    configured: bool | None = None
