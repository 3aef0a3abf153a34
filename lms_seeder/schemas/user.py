"""
LMS Seeder - User schemas
"""
from enum import Enum

from pydantic import BaseModel, EmailStr, Field, field_validator


class UserRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    STUDENT = "student"


class UserSeed(BaseModel):
    """A fixed account definition, before the shared password hash is attached."""

    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=255)
    # Open string: the known values live in UserRole
    role: str = Field(..., min_length=1, max_length=64)
    is_active: bool = True

    @field_validator("email", mode="after")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    def to_row(self, password_hash: str) -> dict:
        return {**self.model_dump(), "password_hash": password_hash}


class SeedReport(BaseModel):
    succeeded: list[str] = []
    failed: dict[str, str] = {}

    @property
    def ok(self) -> bool:
        return not self.failed
