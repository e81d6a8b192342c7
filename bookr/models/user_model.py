import uuid
from enum import Enum as PyEnum

from pydantic import BaseModel, Field


class UserRole(str, PyEnum):
    USER = "user"
    ADMIN = "admin"

    @property
    def priority(self) -> int:
        priorities = {self.USER: 1, self.ADMIN: 2}
        return priorities.get(self, 0)

    def __lt__(self, other: "UserRole") -> bool:
        if not isinstance(other, UserRole):
            return NotImplemented
        return self.priority < other.priority


class UserBase(BaseModel):
    name: str = Field(
        min_length=1,
        max_length=50,
        description="User's display name.",
        examples=["张三"],
    )
    major: str = Field(default="", max_length=100, description="Field of study")
    phone: str = Field(default="", max_length=30, description="Phone number")
    email: str = Field(
        max_length=200,
        description="User's email address, used to log in",
        examples=["user@example.com"],
    )
    expertise: str = Field(default="", max_length=200, description="Areas of expertise")
    role: UserRole = Field(default=UserRole.USER, description="User's role in the system")


class User(UserBase):
    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()), description="Unique Identifier"
    )
    unique_link: str = Field(
        ..., description="Personal invite link, fixed at registration"
    )

    # --- Computed properties ---
    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role.value}')>"
