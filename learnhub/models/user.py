# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User profile and course models.

Profiles are persisted in the document store with camelCase keys, so the
models declare camelCase aliases and always dump ``by_alias``.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """Application role of a user."""

    ADMIN = "admin"
    USER = "user"


class UserProfile(BaseModel):
    """Reconciled local record of the signed-in user.

    Extra keys found in a stored document are kept so that fields written by
    other features survive a round trip through the session layer.

    Attributes:
        id: Identity provider subject id.
        name: Display name, may be empty.
        email: Email address, may be empty.
        role: Application role.
        created_at: ISO 8601 creation timestamp.
        last_active: ISO 8601 last activity timestamp.
        enrolled_courses: Course ids the user is enrolled in.
        completed_lessons: Course id to ordered lesson ids.
        progress: Course id to completion percentage.
        completed_courses: Course ids the user has completed.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        use_enum_values=True,
    )

    id: str
    name: str = ""
    email: str = ""
    role: UserRole = UserRole.USER
    created_at: str = Field(alias="createdAt")
    last_active: str = Field(alias="lastActive")
    enrolled_courses: list[str] = Field(default_factory=list, alias="enrolledCourses")
    completed_lessons: dict[str, list[str]] = Field(
        default_factory=dict, alias="completedLessons"
    )
    progress: dict[str, float] = Field(default_factory=dict)
    completed_courses: list[str] = Field(default_factory=list, alias="completedCourses")

    def to_document(self) -> dict[str, Any]:
        """Serialize to the stored document shape."""
        return self.model_dump(by_alias=True, mode="json")

    @property
    def is_admin(self) -> bool:
        """Whether the user holds the admin role."""
        return self.role == UserRole.ADMIN.value


class Course(BaseModel):
    """Course catalogue entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str
    instructor: str
    level: Literal["Beginner", "Intermediate", "Advanced"]
    category: str
    rating: float
    students: int
    duration: str
    price: float
    image: str
    is_featured: bool | None = Field(default=None, alias="isFeatured")
    is_popular: bool | None = Field(default=None, alias="isPopular")
    progress: float | None = None
    last_accessed: str | None = Field(default=None, alias="lastAccessed")
    completed_at: str | None = Field(default=None, alias="completedAt")
    certificate: str | None = None
