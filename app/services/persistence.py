"""
IoT Monitor Backend - 提交辅助

唯一键先查后插，并发插入时仍可能撞上数据库唯一约束
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateKeyError

logger = logging.getLogger(__name__)


async def commit_unique(db: AsyncSession, message: str) -> None:
    """
    提交事务，唯一约束冲突转换为 DuplicateKeyError

    Raises:
        DuplicateKeyError: 提交时违反唯一约束（事务已回滚）
    """
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.info(f"Unique constraint rejected commit: {e.orig}")
        raise DuplicateKeyError(message) from e
