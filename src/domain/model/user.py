# domain/model/user.py

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    """Roles a user account can hold."""
    ADMIN = 'admin'
    CUSTOMER = 'customer'


@dataclass
class NewUser:
    """User record before it has been persisted (no id yet)."""
    email: str
    password_hash: str
    first_name: str
    last_name: str
    phone: str
    address: str
    city: str
    postal: str
    country: str
    role: Role
    activated: bool
    deleted: bool
    banned: bool
    created_at: datetime
    updated_at: datetime


@dataclass
class User(NewUser):
    """Domain model representing a persisted user account."""
    id: str

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
