"""
IoT Monitor Backend - 活动日志服务

活动日志挂在主站下面，主站由客户端传入的 masterKey 解析，
从不直接信任客户端传来的内部 ID
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import ActivityLogCategory, RecordType
from app.core.exceptions import RecordNotFoundError
from app.models import ActivityLog
from app.schemas.activity_log import ActivityLogCreate, ActivityLogInfo, ActivityLogUpdate
from app.schemas.response import PagedData
from app.services.master_service import MasterService
from app.services.pagination import empty_page, paginate
from app.services.record_query import RecordQuery, ensure_choice

logger = logging.getLogger(__name__)


class ActivityLogService:
    """活动日志服务"""

    @staticmethod
    async def create(db: AsyncSession, data: ActivityLogCreate) -> ActivityLog:
        """
        记录活动日志

        Raises:
            RecordNotFoundError: masterKey 对应的主站不存在
            RecordValidationError: 分类或级别不在允许范围内
        """
        category = ensure_choice(ActivityLogCategory, data.category, "category")
        log_type = ensure_choice(RecordType, data.type, "type")
        master = await MasterService.resolve(db, data.master_key)

        log_entry = ActivityLog(
            master_id=master.id,
            category=category,
            type=log_type,
            description=data.description,
            activity_log_data=data.activity_log_data,
        )
        db.add(log_entry)
        await db.commit()
        await db.refresh(log_entry)

        logger.info(
            f"ActivityLog created: {log_entry.id} {category}/{log_type} for master {master.master_key}"
        )
        return log_entry

    @staticmethod
    async def get_by_id(db: AsyncSession, log_id: int) -> ActivityLog:
        log_entry = await db.get(ActivityLog, log_id)
        if log_entry is None:
            raise RecordNotFoundError("ActivityLog not found")
        return log_entry

    @staticmethod
    async def query(
        db: AsyncSession,
        master_key: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> PagedData:
        """
        分页查询活动日志

        Args:
            db: 数据库会话
            master_key: 主站 Key
            start: 开始时间（含），如 "2021-03-15 00:00:00"
            end: 结束时间（含）
            page: 页码
            limit: 每页数量
        """
        query = RecordQuery(ActivityLog)
        if master_key:
            master = await MasterService.resolve(db, master_key)
            query.where(ActivityLog.master_id == master.id)
        query.created_between(start, end)

        if query.is_empty:
            return empty_page(page, limit)
        return await paginate(db, query.statement(), ActivityLogInfo, page, limit)

    @staticmethod
    async def update(db: AsyncSession, log_id: int, data: ActivityLogUpdate) -> ActivityLog:
        """只更新传入的字段；masterKey 会重新解析"""
        log_entry = await ActivityLogService.get_by_id(db, log_id)
        fields = data.model_dump(exclude_unset=True)

        master_key = fields.pop("master_key", None)
        if master_key is not None:
            master = await MasterService.resolve(db, master_key)
            log_entry.master_id = master.id

        if fields.get("category") is not None:
            fields["category"] = ensure_choice(ActivityLogCategory, fields["category"], "category")
        if fields.get("type") is not None:
            fields["type"] = ensure_choice(RecordType, fields["type"], "type")

        for field, value in fields.items():
            if field in ("category", "type") and value is None:
                continue
            setattr(log_entry, field, value)

        await db.commit()
        await db.refresh(log_entry)

        logger.info(f"ActivityLog updated: {log_entry.id}")
        return log_entry

    @staticmethod
    async def delete(db: AsyncSession, log_id: int) -> None:
        log_entry = await ActivityLogService.get_by_id(db, log_id)
        await db.delete(log_entry)
        await db.commit()

        logger.info(f"ActivityLog deleted: {log_id}")

    @staticmethod
    async def get_latest(db: AsyncSession, master_key: Optional[str] = None) -> ActivityLog:
        """
        获取最新一条活动日志

        Raises:
            RecordNotFoundError: 主站不存在（"Master not found"），
                或主站下没有日志（"ActivityLog not found"）
        """
        query = RecordQuery(ActivityLog)
        if master_key:
            master = await MasterService.resolve(db, master_key)
            query.where(ActivityLog.master_id == master.id)

        log_entry = await query.latest(db)
        if log_entry is None:
            raise RecordNotFoundError("ActivityLog not found")
        return log_entry
