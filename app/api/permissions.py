"""
Permission API Routes - admin management of viewer -> viewee edges.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.db_handlers import PermissionDBHandler, UserDBHandler
from app.dependencies.auth import get_admin_session
from app.exceptions import ConflictError, NotFoundError
from app.schemas import MessageResponse, PermissionCreate, PermissionResponse
from app.utils.auth import SessionContext
from app.utils.logger import setup_logger

logger = setup_logger("api.permissions")

router = APIRouter(prefix="/api/permissions", tags=["Permissions"])

DUPLICATE_EDGE_MESSAGE = "Permission already exists."


@router.get("", response_model=list[PermissionResponse])
async def list_permissions(
    _admin: SessionContext = Depends(get_admin_session),
    db: AsyncSession = Depends(get_app_db),
    permission_db_handler: PermissionDBHandler = Depends(),
):
    permissions = await permission_db_handler.list_permissions(db=db)
    return [PermissionResponse.model_validate(p) for p in permissions]


@router.post(
    "", response_model=PermissionResponse, status_code=status.HTTP_201_CREATED
)
async def create_permission(
    edge: PermissionCreate,
    _admin: SessionContext = Depends(get_admin_session),
    db: AsyncSession = Depends(get_app_db),
    user_db_handler: UserDBHandler = Depends(),
    permission_db_handler: PermissionDBHandler = Depends(),
):
    """Grant `viewerId` read access to the reports of `vieweeId`."""
    for role, user_id in (("Viewer", edge.viewer_id), ("Viewee", edge.viewee_id)):
        if await user_db_handler.get(user_id, db=db) is None:
            raise NotFoundError(f"{role} user not found")

    if await permission_db_handler.get_edge(edge.viewer_id, edge.viewee_id, db=db):
        raise ConflictError(DUPLICATE_EDGE_MESSAGE)

    try:
        permission = await permission_db_handler.create(
            {"viewer_id": edge.viewer_id, "viewee_id": edge.viewee_id}, db=db
        )
    except IntegrityError as e:
        raise ConflictError(DUPLICATE_EDGE_MESSAGE) from e

    logger.info(
        f"Granted {permission.viewer_id} read access to reports of {permission.viewee_id}"
    )
    return PermissionResponse.model_validate(permission)


@router.delete("/{permission_id}", response_model=MessageResponse)
async def delete_permission(
    permission_id: UUID,
    _admin: SessionContext = Depends(get_admin_session),
    db: AsyncSession = Depends(get_app_db),
    permission_db_handler: PermissionDBHandler = Depends(),
):
    removed = await permission_db_handler.remove(permission_id, db=db)
    if removed is None:
        raise NotFoundError("Permission not found")
    logger.info(f"Revoked permission {permission_id}")
    return MessageResponse(message="Permission deleted successfully.")
