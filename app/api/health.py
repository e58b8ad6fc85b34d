"""IoT Monitor Backend - lightweight health endpoint."""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_db
from app.schemas.response import ApiResponse, ErrorCodes, error_response, success_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=ApiResponse)
async def health_check(db: AsyncSession = Depends(get_async_db)):
    """Liveness + database probe."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=error_response(
                code=ErrorCodes.INTERNAL_ERROR,
                message="Database unavailable",
                data={"status": "unhealthy"},
            ).model_dump(mode="json"),
        )

    return success_response(
        data={"status": "healthy", "services": {"database": "healthy"}},
        message="Health check completed",
    )
