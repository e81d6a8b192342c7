from typing import Optional, List, Dict, Any

from pydantic import (
    BaseModel,
    EmailStr,
    Field,
    ConfigDict,
    field_validator,
    model_validator,
)

from bookr.models.user_model import UserRole


class UserBase(BaseModel):
    """Base schema for user data."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="User's name",
        examples=["张三"],
    )
    major: str = Field("", max_length=100, description="Field of study")
    phone: str = Field("", max_length=30, description="Phone number")
    email: EmailStr = Field(
        ..., description="User's email address", examples=["user@example.com"]
    )
    expertise: str = Field("", max_length=200, description="Areas of expertise")

    @field_validator("name")
    @classmethod
    def validate_names(cls, v: str) -> str:
        """Validate and clean names."""
        return " ".join(v.strip().split())


class UserRegister(UserBase):
    """Self-registration. The role is always ``user``."""


class UserCreate(UserBase):
    """Admin-created account."""

    role: UserRole = Field(UserRole.USER, description="Role for the new account")


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    major: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    email: Optional[EmailStr] = None
    expertise: Optional[str] = Field(None, max_length=200)
    role: Optional[UserRole] = None

    @field_validator("name")
    @classmethod
    def validate_names(cls, v: Optional[str]) -> Optional[str]:
        if v:
            return " ".join(v.strip().split())
        return v

    @model_validator(mode="before")
    @classmethod
    def validate_at_least_one_field(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """Ensure at least one field is provided for update."""
        if isinstance(values, dict) and not any(
            v is not None for v in values.values()
        ):
            raise ValueError("At least one field must be provided for update")
        return values


# --- Response Schemas ---
class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="User ID")
    name: str
    major: str
    phone: str
    email: str
    expertise: str
    role: UserRole = Field(..., description="User role")
    unique_link: str = Field(..., description="Personal invite link")


class UserListResponse(BaseModel):
    items: List[UserResponse]
    total: int = Field(..., ge=0)


# --- Auth ---
class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=200, examples=["user@example.com"])


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse
