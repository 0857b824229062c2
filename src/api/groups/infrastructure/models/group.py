"""SQLAlchemy ORM models for groups and their membership/bookmark edges."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin

GROUP_NAME_UNIQUE = "groups_space_id_lower_name_index"
GROUP_USER_UNIQUE = "group_users_space_user_id_group_id_index"
GROUP_BOOKMARK_UNIQUE = "group_bookmarks_space_user_id_group_id_index"


class GroupModel(Base, TimestampMixin):
    """ORM model for the groups table.

    Group names are unique per space, compared case-insensitively.
    """

    __tablename__ = "groups"
    __table_args__ = (
        CheckConstraint("state IN ('OPEN', 'CLOSED')", name="state"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    space_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("spaces.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    creator_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("space_users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    state: Mapped[str] = mapped_column(String(16), nullable=False, default="OPEN")

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<GroupModel(id={self.id}, space_id={self.space_id}, "
            f"name={self.name}, is_private={self.is_private})>"
        )


Index(
    GROUP_NAME_UNIQUE,
    GroupModel.space_id,
    func.lower(GroupModel.name),
    unique=True,
)


class GroupUserModel(Base, TimestampMixin):
    """ORM model for the group_users table (memberships)."""

    __tablename__ = "group_users"
    __table_args__ = (
        UniqueConstraint("space_user_id", "group_id", name=GROUP_USER_UNIQUE),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    space_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("spaces.id", ondelete="CASCADE"),
        nullable=False,
    )
    group_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    space_user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("space_users.id", ondelete="CASCADE"),
        nullable=False,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<GroupUserModel(group_id={self.group_id}, "
            f"space_user_id={self.space_user_id})>"
        )


class GroupBookmarkModel(Base, TimestampMixin):
    """ORM model for the group_bookmarks table."""

    __tablename__ = "group_bookmarks"
    __table_args__ = (
        UniqueConstraint("space_user_id", "group_id", name=GROUP_BOOKMARK_UNIQUE),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    space_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("spaces.id", ondelete="CASCADE"),
        nullable=False,
    )
    group_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    space_user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("space_users.id", ondelete="CASCADE"),
        nullable=False,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<GroupBookmarkModel(group_id={self.group_id}, "
            f"space_user_id={self.space_user_id})>"
        )
