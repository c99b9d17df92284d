"""
Kernel data models (SQLAlchemy).
"""

from tsea.kernel.models.base import Base, TimestampMixin, generate_uuid
from tsea.kernel.models.project import Project
from tsea.kernel.models.user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "generate_uuid",
    "Project",
    "User",
]
