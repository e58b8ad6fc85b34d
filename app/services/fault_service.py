"""
IoT Monitor Backend - 故障服务

故障挂在网关和设备下面：gatewayId 全局解析，deviceId 在网关内解析
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import RecordType
from app.core.exceptions import RecordNotFoundError, RecordValidationError
from app.models import Device, Fault, Gateway
from app.schemas.fault import FaultCreate, FaultInfo, FaultUpdate
from app.schemas.response import PagedData
from app.services.device_service import DeviceService
from app.services.gateway_service import GatewayService
from app.services.pagination import empty_page, paginate
from app.services.record_query import RecordQuery, ensure_choice

logger = logging.getLogger(__name__)


class FaultService:
    """故障服务"""

    @staticmethod
    async def _owner_query(
        db: AsyncSession,
        gateway_key: Optional[str],
        device_key: Optional[str],
    ) -> RecordQuery:
        """按 gatewayId / deviceId 构建查询条件"""
        if device_key and not gateway_key:
            raise RecordValidationError('"deviceId" requires "gatewayId"')

        query = RecordQuery(Fault)
        if gateway_key:
            gateway = await GatewayService.resolve(db, gateway_key)
            query.where(Fault.gateway_id == gateway.id)
            if device_key:
                device = await DeviceService.resolve(db, gateway, device_key)
                query.where(Fault.device_id == device.id)
        return query

    @staticmethod
    async def create(db: AsyncSession, data: FaultCreate) -> Fault:
        """
        记录故障

        Raises:
            RecordNotFoundError: 网关或设备不存在
            RecordValidationError: 级别不在允许范围内
        """
        fault_type = ensure_choice(RecordType, data.type, "type")
        gateway = await GatewayService.resolve(db, data.gateway_id)
        device = await DeviceService.resolve(db, gateway, data.device_id)

        fault = Fault(
            gateway_id=gateway.id,
            device_id=device.id,
            category=data.category,
            type=fault_type,
            event=data.event,
            position=data.position,
            description=data.description,
            reason=data.reason,
            suggest=data.suggest,
            fault_data=data.fault_data,
        )
        db.add(fault)
        await db.commit()
        await db.refresh(fault)

        logger.info(
            f"Fault created: {fault.id} {fault.category}/{fault.event} "
            f"on {gateway.gateway_key}/{device.device_key}"
        )
        return fault

    @staticmethod
    async def get_by_id(db: AsyncSession, fault_id: int) -> Fault:
        fault = await db.get(Fault, fault_id)
        if fault is None:
            raise RecordNotFoundError("Fault not found")
        return fault

    @staticmethod
    async def query(
        db: AsyncSession,
        gateway_key: Optional[str] = None,
        device_key: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> PagedData:
        """分页查询故障，参数含义同 ActivityLogService.query"""
        query = await FaultService._owner_query(db, gateway_key, device_key)
        query.created_between(start, end)

        if query.is_empty:
            return empty_page(page, limit)
        return await paginate(db, query.statement(), FaultInfo, page, limit)

    @staticmethod
    async def update(db: AsyncSession, fault_id: int, data: FaultUpdate) -> Fault:
        """
        只更新传入的字段

        只传 deviceId 时在当前网关内解析；只传 gatewayId 时，
        用当前设备的 deviceId 在新网关内重新解析
        """
        fault = await FaultService.get_by_id(db, fault_id)
        fields = data.model_dump(exclude_unset=True)

        gateway_key = fields.pop("gateway_id", None)
        device_key = fields.pop("device_id", None)
        if gateway_key is not None or device_key is not None:
            if gateway_key is not None:
                gateway = await GatewayService.resolve(db, gateway_key)
            else:
                gateway = await db.get(Gateway, fault.gateway_id)
                if gateway is None:
                    raise RecordNotFoundError("Gateway not found")
            if device_key is None:
                current_device = await db.get(Device, fault.device_id)
                if current_device is None:
                    raise RecordNotFoundError("Device not found")
                device_key = current_device.device_key
            device = await DeviceService.resolve(db, gateway, device_key)
            fault.gateway_id = gateway.id
            fault.device_id = device.id

        if fields.get("type") is not None:
            fields["type"] = ensure_choice(RecordType, fields["type"], "type")

        for field, value in fields.items():
            if field in ("category", "type", "event", "position") and value is None:
                continue
            setattr(fault, field, value)

        await db.commit()
        await db.refresh(fault)

        logger.info(f"Fault updated: {fault.id}")
        return fault

    @staticmethod
    async def delete(db: AsyncSession, fault_id: int) -> None:
        fault = await FaultService.get_by_id(db, fault_id)
        await db.delete(fault)
        await db.commit()

        logger.info(f"Fault deleted: {fault_id}")

    @staticmethod
    async def get_latest(
        db: AsyncSession,
        gateway_key: Optional[str] = None,
        device_key: Optional[str] = None,
    ) -> Fault:
        """
        获取最新一条故障

        Raises:
            RecordNotFoundError: 网关/设备不存在，或没有故障记录（"Fault not found"）
        """
        query = await FaultService._owner_query(db, gateway_key, device_key)

        fault = await query.latest(db)
        if fault is None:
            raise RecordNotFoundError("Fault not found")
        return fault
