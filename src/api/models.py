"""Pydantic models for API request/response."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from domain.model.session import Session
from domain.model.user import Role, User


class UserSummary(BaseModel):
    """Public view of a user. Never carries the password or its hash."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    first_name: str = Field(..., serialization_alias='firstName')
    last_name: str = Field(..., serialization_alias='lastName')
    role: Role

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
        )


class RegisterResponse(BaseModel):
    """Response model for a successful registration."""
    message: str
    user: UserSummary


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error body returned by the auth endpoints."""
    error: str
    details: Optional[list[FieldErrorResponse]] = None


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    user: UserSummary


class SessionResponse(BaseModel):
    """Current session as seen by the client."""
    id: str
    email: str
    name: str
    role: Role

    @classmethod
    def from_session(cls, session: Session) -> "SessionResponse":
        return cls(id=session.id, email=session.email, name=session.name, role=session.role)
