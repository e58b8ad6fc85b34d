"""
IoT Monitor Backend - 故障 API

创建接口不需要认证（由网关直接上报），其余接口需要登录
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_async_db
from app.dependencies import get_current_user
from app.models import User
from app.schemas.fault import FaultCreate, FaultInfo, FaultUpdate
from app.schemas.response import PagedData
from app.services.fault_service import FaultService

router = APIRouter()


@router.post(
    "",
    response_model=FaultInfo,
    status_code=status.HTTP_201_CREATED,
    summary="创建故障",
)
async def create_fault(
    request: FaultCreate,
    db: AsyncSession = Depends(get_async_db),
):
    fault = await FaultService.create(db, request)
    return FaultInfo.model_validate(fault)


@router.get(
    "",
    response_model=PagedData[FaultInfo],
    summary="查询故障",
    description="分页查询故障，支持按网关、设备与时间范围过滤，最新在前",
)
async def list_faults(
    gateway_key: Optional[str] = Query(None, alias="gatewayId", description="网关 ID"),
    device_key: Optional[str] = Query(None, alias="deviceId", description="设备 ID（需同时指定网关）"),
    start: Optional[str] = Query(None, alias="from", description="开始时间，如 2021-03-15 00:00:00"),
    end: Optional[str] = Query(None, alias="to", description="结束时间"),
    page: int = Query(1, ge=1, le=settings.MAX_PAGE, description="页码"),
    limit: int = Query(
        settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT, description="每页数量"
    ),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    return await FaultService.query(db, gateway_key, device_key, start, end, page, limit)


@router.get("/latest", response_model=FaultInfo, summary="获取最新故障")
async def get_latest_fault(
    gateway_key: Optional[str] = Query(None, alias="gatewayId", description="网关 ID"),
    device_key: Optional[str] = Query(None, alias="deviceId", description="设备 ID"),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    fault = await FaultService.get_latest(db, gateway_key, device_key)
    return FaultInfo.model_validate(fault)


@router.get("/{fault_id}", response_model=FaultInfo, summary="获取故障")
async def get_fault(
    fault_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    fault = await FaultService.get_by_id(db, fault_id)
    return FaultInfo.model_validate(fault)


@router.patch("/{fault_id}", response_model=FaultInfo, summary="更新故障")
async def update_fault(
    fault_id: int,
    request: FaultUpdate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    fault = await FaultService.update(db, fault_id, request)
    return FaultInfo.model_validate(fault)


@router.delete("/{fault_id}", status_code=status.HTTP_204_NO_CONTENT, summary="删除故障")
async def delete_fault(
    fault_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    await FaultService.delete(db, fault_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
