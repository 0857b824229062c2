"""SQLAlchemy ORM models for spaces, users and space users.

These tables are owned by the identity side of the system; the Groups
context maps them only to resolve actors and to join against.
"""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class SpaceModel(Base, TimestampMixin):
    """ORM model for the spaces table (tenants)."""

    __tablename__ = "spaces"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<SpaceModel(id={self.id}, name={self.name})>"


class UserModel(Base, TimestampMixin):
    """ORM model for the users table (global identities)."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, email={self.email})>"


class SpaceUserModel(Base, TimestampMixin):
    """ORM model for the space_users table.

    A user appears at most once per space. Deleting a space user cascades
    to their memberships and bookmarks.
    """

    __tablename__ = "space_users"
    __table_args__ = (
        UniqueConstraint(
            "space_id", "user_id", name="space_users_space_id_user_id_index"
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    space_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("spaces.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<SpaceUserModel(id={self.id}, space_id={self.space_id}, "
            f"user_id={self.user_id})>"
        )
