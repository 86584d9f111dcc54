"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field, field_validator


class UserRegister(BaseModel):
    """Signup request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=72)  # bcrypt ignores bytes past 72
    name: str = Field(..., max_length=255)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be empty")
        return value


class UserLogin(BaseModel):
    """Login request.

    Deliberately loose: anything that is not a registered email/password pair
    is reported as invalid credentials, never as a validation error.
    """

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=1024)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()
