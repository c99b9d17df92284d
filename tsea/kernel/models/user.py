"""
User model - identity record that owns the subscription tier.
"""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tsea.curriculum.models import Tier
from tsea.kernel.models.base import Base, TimestampMixin, generate_uuid

if TYPE_CHECKING:
    from tsea.kernel.models.project import Project


class User(Base, TimestampMixin):
    """User account model."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )
    # Assigned at signup and by the billing webhook only
    tier: Mapped[str] = mapped_column(
        String(20),
        default=Tier.BASIC.value,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    projects: Mapped[List["Project"]] = relationship(
        "Project",
        back_populates="owner",
        cascade="all, delete-orphan",
    )

    @property
    def tier_value(self) -> str:
        """Tier as a plain string (SQLite may hand back either form)."""
        return self.tier.value if hasattr(self.tier, "value") else self.tier

    def __repr__(self) -> str:
        return f"<User {self.email} tier={self.tier_value}>"
