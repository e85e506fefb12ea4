from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel

MAX_PASSWORD_BYTES = 72  # bcrypt only considers the first 72 bytes


class ApiModel(BaseModel):
    """Response base: camelCase on the wire, readable from ORM objects."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# --- Auth requests ---


class UserRegister(BaseModel):
    name: str = Field(..., min_length=1, description="Display name")
    email: str = Field(..., description="Unique email address used for login")
    password: str = Field(..., min_length=1, description="Plain text password")
    bio: str | None = Field(None, description="Optional profile text")

    @field_validator("email")
    @classmethod
    def email_syntax_guard(cls, v: str) -> str:
        # Stored and looked up exactly as sent; login compares the raw string
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"value is not a valid email address: {e}") from e
        return v

    @field_validator("password")
    @classmethod
    def password_length_guard(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be <= {MAX_PASSWORD_BYTES} bytes")
        return v


class UserLogin(BaseModel):
    email: str = Field(..., description="Email used at registration")
    password: str = Field(..., description="Password for login")


# --- Users ---


class UserSummary(ApiModel):
    """Public projection returned alongside a token."""

    id: int
    name: str
    email: str
    bio: str | None = None


class UserProfile(UserSummary):
    """Public projection with audit timestamps, served by profile lookups."""

    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    token: str = Field(..., description="Signed token for the x-auth-token header")
    user: UserSummary


# --- Posts ---


class PostCreate(BaseModel):
    content: str = Field(..., min_length=1, description="Post body")


class AuthorSummary(ApiModel):
    id: int
    name: str


class PostResponse(ApiModel):
    id: int
    content: str
    author_id: int
    created_at: datetime
    updated_at: datetime
    author: AuthorSummary


# --- Misc ---


class HealthStatus(BaseModel):
    status: str = "ok"
