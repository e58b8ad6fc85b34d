"""
IoT Monitor Backend - 设备服务

设备归属于网关，访问权限沿 网关 -> 主站 链路校验
"""
import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import ConnectionState, DeviceType
from app.core.exceptions import DuplicateKeyError, RecordNotFoundError
from app.models import Device, Fault, Gateway, User
from app.schemas.device import DeviceCreate, DeviceInfo, DeviceUpdate
from app.schemas.response import PagedData
from app.services.gateway_service import GatewayService
from app.services.master_service import MasterService
from app.services.pagination import paginate
from app.services.persistence import commit_unique
from app.services.record_query import ensure_choice, newest_first

logger = logging.getLogger(__name__)


class DeviceService:
    """设备服务"""

    @staticmethod
    async def resolve(db: AsyncSession, gateway: Gateway, device_key: str) -> Device:
        """
        (网关, deviceId) -> 设备

        Raises:
            RecordNotFoundError: 设备不存在
        """
        result = await db.execute(
            select(Device).where(
                Device.gateway_id == gateway.id,
                Device.device_key == device_key,
            )
        )
        device = result.scalar_one_or_none()
        if device is None:
            raise RecordNotFoundError("Device not found")
        return device

    @staticmethod
    async def create(db: AsyncSession, data: DeviceCreate, user: User) -> Device:
        gateway = await GatewayService.resolve_owned(db, data.gateway_id, user)

        taken = await db.execute(
            select(Device.id).where(
                Device.gateway_id == gateway.id,
                Device.device_key == data.device_id,
            ).limit(1)
        )
        if taken.first() is not None:
            raise DuplicateKeyError("Device id already taken in this gateway")

        device = Device(
            device_key=data.device_id,
            name=data.name,
            description=data.description,
            type=ensure_choice(DeviceType, data.type, "type"),
            state=ensure_choice(ConnectionState, data.state, "state"),
            gateway_id=gateway.id,
        )
        db.add(device)
        await commit_unique(db, "Device id already taken in this gateway")
        await db.refresh(device)

        logger.info(f"Device created: {device.id} ({gateway.gateway_key}/{device.device_key})")
        return device

    @staticmethod
    async def query(
        db: AsyncSession,
        user: User,
        gateway_key: Optional[str] = None,
        device_type: Optional[DeviceType] = None,
        state: Optional[ConnectionState] = None,
        page: int = 1,
        limit: int = 10,
    ) -> PagedData:
        """分页查询设备，非管理员只能看到自己主站下的设备"""
        stmt = select(Device)
        if gateway_key:
            gateway = await GatewayService.resolve_owned(db, gateway_key, user)
            stmt = stmt.where(Device.gateway_id == gateway.id)
        elif not user.is_admin:
            owned_gateways = select(Gateway.id).where(
                Gateway.master_id.in_(MasterService.owned_master_ids(user))
            )
            stmt = stmt.where(Device.gateway_id.in_(owned_gateways))
        if device_type:
            stmt = stmt.where(Device.type == DeviceType(device_type).value)
        if state:
            stmt = stmt.where(Device.state == ConnectionState(state).value)
        return await paginate(db, newest_first(stmt, Device), DeviceInfo, page, limit)

    @staticmethod
    async def get_by_id(db: AsyncSession, device_id: int, user: User) -> Device:
        device = await db.get(Device, device_id)
        if device is None:
            raise RecordNotFoundError("Device not found")
        gateway = await db.get(Gateway, device.gateway_id)
        if gateway is None:
            raise RecordNotFoundError("Gateway not found")
        await GatewayService.check_owner(db, gateway, user)
        return device

    @staticmethod
    async def update(
        db: AsyncSession,
        device_id: int,
        data: DeviceUpdate,
        user: User,
    ) -> Device:
        device = await DeviceService.get_by_id(db, device_id, user)

        fields = data.model_dump(exclude_unset=True)
        if fields.get("type") is not None:
            fields["type"] = ensure_choice(DeviceType, fields["type"], "type")
        if fields.get("state") is not None:
            fields["state"] = ensure_choice(ConnectionState, fields["state"], "state")

        for field, value in fields.items():
            if value is None and field != "description":
                continue
            setattr(device, field, value)

        await db.commit()
        await db.refresh(device)

        logger.info(f"Device updated: {device.id}")
        return device

    @staticmethod
    async def delete(db: AsyncSession, device_id: int, user: User) -> None:
        """删除设备及其故障"""
        device = await DeviceService.get_by_id(db, device_id, user)

        await db.execute(delete(Fault).where(Fault.device_id == device.id))
        await db.delete(device)
        await db.commit()

        logger.info(f"Device deleted: {device_id} by {user.username}")
