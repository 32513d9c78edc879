from fastapi import APIRouter

from app.utils.logger import setup_logger

logger = setup_logger("api")

router = APIRouter()


@router.get("/api/")
async def read_root():
    return {"message": "Sales Activity Reports API is running!"}


@router.get("/health")
async def health_check():
    """Liveness probe; does not touch the database."""
    return {"status": "ok"}
