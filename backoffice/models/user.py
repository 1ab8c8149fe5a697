"""User model."""

from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import object_session, relationship

from backoffice.database import Base
from backoffice.models.mixins import TimestampMixin
from backoffice.models.role import Permission, user_roles


class User(Base, TimestampMixin):
    """User model for authentication and auditing."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_superuser = Column(Boolean, default=False, nullable=False)

    # Relationships
    roles = relationship("Role", secondary=user_roles, back_populates="users")

    def permission_names(self) -> set[str]:
        """Return the names of every permission granted through the user's roles."""
        if not self.is_active:
            return set()
        if self.is_superuser:
            session = object_session(self)
            if session is None:
                return set()
            return {name for (name,) in session.query(Permission.name).all()}
        return {permission.name for role in self.roles for permission in role.permissions}

    def has_permission(self, name: str) -> bool:
        """Check if the user holds a permission."""
        if self.is_active and self.is_superuser:
            return True
        return name in self.permission_names()
