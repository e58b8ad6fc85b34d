"""
IoT Monitor Backend - 网关服务

网关归属于主站，访问权限跟随主站：非管理员只能操作自己主站下的网关
"""
import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import ConnectionState
from app.core.exceptions import DuplicateKeyError, RecordNotFoundError
from app.models import Device, Fault, Gateway, Master, User
from app.schemas.gateway import GatewayCreate, GatewayInfo, GatewayUpdate
from app.schemas.response import PagedData
from app.services.master_service import MasterService
from app.services.pagination import paginate
from app.services.persistence import commit_unique
from app.services.record_query import ensure_choice, newest_first

logger = logging.getLogger(__name__)


class GatewayService:
    """网关服务"""

    @staticmethod
    async def resolve(db: AsyncSession, gateway_key: str) -> Gateway:
        """
        gatewayId -> 网关

        Raises:
            RecordNotFoundError: 网关不存在
        """
        result = await db.execute(select(Gateway).where(Gateway.gateway_key == gateway_key))
        gateway = result.scalar_one_or_none()
        if gateway is None:
            raise RecordNotFoundError("Gateway not found")
        return gateway

    @staticmethod
    async def check_owner(db: AsyncSession, gateway: Gateway, user: User) -> None:
        """
        Raises:
            PermissionDeniedError: 网关所属主站不属于当前用户
        """
        if user.is_admin:
            return
        master = await db.get(Master, gateway.master_id)
        if master is None:
            raise RecordNotFoundError("Master not found")
        MasterService.check_owner(master, user)

    @staticmethod
    async def resolve_owned(db: AsyncSession, gateway_key: str, user: User) -> Gateway:
        """gatewayId -> 网关，并校验访问权限"""
        gateway = await GatewayService.resolve(db, gateway_key)
        await GatewayService.check_owner(db, gateway, user)
        return gateway

    @staticmethod
    async def create(db: AsyncSession, data: GatewayCreate, user: User) -> Gateway:
        master = await MasterService.resolve(db, data.master_key)
        MasterService.check_owner(master, user)

        taken = await db.execute(
            select(Gateway.id).where(Gateway.gateway_key == data.gateway_id).limit(1)
        )
        if taken.first() is not None:
            raise DuplicateKeyError("Gateway id already taken")

        gateway = Gateway(
            gateway_key=data.gateway_id,
            name=data.name,
            description=data.description,
            state=ensure_choice(ConnectionState, data.state, "state"),
            master_id=master.id,
        )
        db.add(gateway)
        await commit_unique(db, "Gateway id already taken")
        await db.refresh(gateway)

        logger.info(f"Gateway created: {gateway.id} ({gateway.gateway_key}) for master {master.master_key}")
        return gateway

    @staticmethod
    async def query(
        db: AsyncSession,
        user: User,
        master_key: Optional[str] = None,
        state: Optional[ConnectionState] = None,
        page: int = 1,
        limit: int = 10,
    ) -> PagedData:
        """分页查询网关，非管理员只能看到自己主站下的网关"""
        stmt = select(Gateway)
        if master_key:
            master = await MasterService.resolve(db, master_key)
            MasterService.check_owner(master, user)
            stmt = stmt.where(Gateway.master_id == master.id)
        elif not user.is_admin:
            stmt = stmt.where(Gateway.master_id.in_(MasterService.owned_master_ids(user)))
        if state:
            stmt = stmt.where(Gateway.state == ConnectionState(state).value)
        return await paginate(db, newest_first(stmt, Gateway), GatewayInfo, page, limit)

    @staticmethod
    async def get_by_id(db: AsyncSession, gateway_id: int, user: User) -> Gateway:
        gateway = await db.get(Gateway, gateway_id)
        if gateway is None:
            raise RecordNotFoundError("Gateway not found")
        await GatewayService.check_owner(db, gateway, user)
        return gateway

    @staticmethod
    async def update(
        db: AsyncSession,
        gateway_id: int,
        data: GatewayUpdate,
        user: User,
    ) -> Gateway:
        gateway = await GatewayService.get_by_id(db, gateway_id, user)

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field != "description":
                continue
            if field == "state":
                value = ensure_choice(ConnectionState, value, "state")
            setattr(gateway, field, value)

        await db.commit()
        await db.refresh(gateway)

        logger.info(f"Gateway updated: {gateway.id}")
        return gateway

    @staticmethod
    async def delete(db: AsyncSession, gateway_id: int, user: User) -> None:
        """删除网关及其设备、故障"""
        gateway = await GatewayService.get_by_id(db, gateway_id, user)

        await db.execute(delete(Fault).where(Fault.gateway_id == gateway.id))
        await db.execute(delete(Device).where(Device.gateway_id == gateway.id))
        await db.delete(gateway)
        await db.commit()

        logger.info(f"Gateway deleted: {gateway_id} by {user.username}")
