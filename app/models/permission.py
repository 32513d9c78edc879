"""
Permission model: a directed "viewer may read viewee's reports" edge.
"""

from sqlalchemy import Column, ForeignKey, Index, UniqueConstraint, Uuid

from app.models.base import Base, TimestampMixin, UUIDMixin, fk_target, table_args


class Permission(Base, UUIDMixin, TimestampMixin):
    """
    Grants `viewer_id` read access to the reports owned by `viewee_id`.

    Created and deleted by admins; removed automatically when either user is
    deleted. Each (viewer, viewee) pair exists at most once.
    """

    __tablename__ = "permissions"
    __table_args__ = table_args(
        UniqueConstraint("viewer_id", "viewee_id", name="uq_permissions_edge"),
        Index("ix_permissions_viewer_id", "viewer_id"),
        Index("ix_permissions_viewee_id", "viewee_id"),
    )

    viewer_id = Column(
        Uuid(as_uuid=True),
        ForeignKey(fk_target("users.id"), ondelete="CASCADE"),
        nullable=False,
        comment="User granted read access",
    )

    viewee_id = Column(
        Uuid(as_uuid=True),
        ForeignKey(fk_target("users.id"), ondelete="CASCADE"),
        nullable=False,
        comment="User whose reports become readable",
    )

    def __repr__(self):
        return f"<Permission(id={self.id}, viewer_id={self.viewer_id}, viewee_id={self.viewee_id})>"
