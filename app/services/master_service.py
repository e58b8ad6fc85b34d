"""
IoT Monitor Backend - 主站服务
"""
import logging
from typing import Optional

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateKeyError, PermissionDeniedError, RecordNotFoundError
from app.models import ActivityLog, Device, Fault, Gateway, Master, User
from app.schemas.master import MasterCreate, MasterInfo, MasterUpdate
from app.schemas.response import PagedData
from app.services.pagination import paginate
from app.services.persistence import commit_unique
from app.services.record_query import newest_first

logger = logging.getLogger(__name__)


class MasterService:
    """主站服务"""

    @staticmethod
    async def is_master_key_taken(
        db: AsyncSession,
        master_key: str,
        exclude_master_id: Optional[int] = None,
    ) -> bool:
        """masterKey 是否已被其他主站占用"""
        stmt = select(Master.id).where(Master.master_key == master_key)
        if exclude_master_id is not None:
            stmt = stmt.where(Master.id != exclude_master_id)
        result = await db.execute(stmt.limit(1))
        return result.first() is not None

    @staticmethod
    async def resolve(db: AsyncSession, master_key: str) -> Master:
        """
        masterKey -> 主站

        Raises:
            RecordNotFoundError: 主站不存在
        """
        result = await db.execute(select(Master).where(Master.master_key == master_key))
        master = result.scalar_one_or_none()
        if master is None:
            raise RecordNotFoundError("Master not found")
        return master

    @staticmethod
    async def create(db: AsyncSession, data: MasterCreate, user: User) -> Master:
        if await MasterService.is_master_key_taken(db, data.master_key):
            raise DuplicateKeyError("Master key already taken")

        master = Master(
            master_key=data.master_key,
            name=data.name,
            description=data.description,
            user_id=user.id,
        )
        db.add(master)
        await commit_unique(db, "Master key already taken")
        await db.refresh(master)

        logger.info(f"Master created: {master.id} ({master.master_key}) by {user.username}")
        return master

    @staticmethod
    async def query(
        db: AsyncSession,
        user: User,
        name: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> PagedData:
        """分页查询主站，非管理员只能看到自己的主站"""
        stmt = select(Master)
        if not user.is_admin:
            stmt = stmt.where(Master.user_id == user.id)
        if name:
            stmt = stmt.where(Master.name.ilike(f"%{name}%"))
        return await paginate(db, newest_first(stmt, Master), MasterInfo, page, limit)

    @staticmethod
    def check_owner(master: Master, user: User) -> None:
        """只有主站所有者或管理员可以访问主站及其网关、设备"""
        if not user.is_admin and master.user_id != user.id:
            raise PermissionDeniedError("Forbidden")

    @staticmethod
    def owned_master_ids(user: User) -> Select:
        """当前用户拥有的主站 id 子查询"""
        return select(Master.id).where(Master.user_id == user.id)

    @staticmethod
    async def get_by_id(db: AsyncSession, master_id: int, user: User) -> Master:
        master = await db.get(Master, master_id)
        if master is None:
            raise RecordNotFoundError("Master not found")
        MasterService.check_owner(master, user)
        return master

    @staticmethod
    async def update(
        db: AsyncSession,
        master_id: int,
        data: MasterUpdate,
        user: User,
    ) -> Master:
        master = await MasterService.get_by_id(db, master_id, user)

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field != "description":
                continue
            setattr(master, field, value)

        await db.commit()
        await db.refresh(master)

        logger.info(f"Master updated: {master.id}")
        return master

    @staticmethod
    async def delete(db: AsyncSession, master_id: int, user: User) -> None:
        """删除主站及其网关、设备、故障、活动日志"""
        master = await MasterService.get_by_id(db, master_id, user)

        gateway_ids = select(Gateway.id).where(Gateway.master_id == master.id)
        await db.execute(delete(Fault).where(Fault.gateway_id.in_(gateway_ids)))
        await db.execute(delete(Device).where(Device.gateway_id.in_(gateway_ids)))
        await db.execute(delete(Gateway).where(Gateway.master_id == master.id))
        await db.execute(delete(ActivityLog).where(ActivityLog.master_id == master.id))
        await db.delete(master)
        await db.commit()

        logger.info(f"Master deleted: {master_id} by {user.username}")
