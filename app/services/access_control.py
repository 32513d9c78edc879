"""
Allow/deny decisions for admin operations and report access.

Every check is a function of the session, the target and the permission edges;
denials raise ForbiddenError.
"""

import uuid
from collections.abc import Iterable

from app.exceptions import ForbiddenError
from app.services.permission_graph import PermissionEdge, can_view
from app.utils.auth import SessionContext
from app.utils.logger import setup_logger

logger = setup_logger("access_control")


def require_admin(session: SessionContext) -> None:
    if not session.is_admin:
        logger.warning(f"User {session.user_id} denied admin operation")
        raise ForbiddenError("Admin access required")


def authorize_report_read(
    session: SessionContext,
    target_user_id: uuid.UUID,
    permissions: Iterable[PermissionEdge],
) -> None:
    """Admins read everyone; others read themselves and their viewees."""
    if session.is_admin:
        return
    if can_view(session.user_id, target_user_id, permissions):
        return
    logger.warning(
        f"User {session.user_id} denied read access to reports of {target_user_id}"
    )
    raise ForbiddenError("You do not have permission to view these reports")


def authorize_report_mutation(session: SessionContext, owner_id: uuid.UUID) -> None:
    """Only the record's owner or an admin may update or delete it."""
    if session.is_admin or session.user_id == owner_id:
        return
    logger.warning(
        f"User {session.user_id} denied change to a record owned by {owner_id}"
    )
    raise ForbiddenError("You can only modify your own records")


def resolve_report_owner(session: SessionContext) -> uuid.UUID:
    """New records belong to the requester, whatever the body says."""
    return session.user_id
