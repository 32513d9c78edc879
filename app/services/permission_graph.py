"""
Permission graph queries.

Edges are directed: viewer -> viewee means "viewer may read viewee's
reports". The functions here are pure and take the edge set explicitly so
callers decide how much of the graph to load.
"""

import uuid
from collections.abc import Iterable
from typing import Protocol

from app.models import UserRole
from app.utils.auth import SessionContext


class PermissionEdge(Protocol):
    viewer_id: uuid.UUID
    viewee_id: uuid.UUID


class UserLike(Protocol):
    id: uuid.UUID
    role: UserRole


def can_view(
    viewer_id: uuid.UUID,
    viewee_id: uuid.UUID,
    permissions: Iterable[PermissionEdge],
) -> bool:
    """True if viewer is the viewee or an edge viewer -> viewee exists."""
    if viewer_id == viewee_id:
        return True
    return any(
        p.viewer_id == viewer_id and p.viewee_id == viewee_id for p in permissions
    )


def viewable_user_ids(
    viewer: SessionContext,
    all_users: Iterable[UserLike],
    permissions: Iterable[PermissionEdge],
) -> set[uuid.UUID]:
    """
    Users whose reports `viewer` may read.

    Admins see every user with the `User` role. Everyone else sees themselves
    plus each viewee they hold an edge to.
    """
    if viewer.is_admin:
        return {u.id for u in all_users if u.role == UserRole.USER}

    viewable = {viewer.user_id}
    viewable.update(
        p.viewee_id for p in permissions if p.viewer_id == viewer.user_id
    )
    return viewable
