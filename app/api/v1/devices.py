"""
IoT Monitor Backend - 设备管理 API
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.constants import ConnectionState, DeviceType
from app.database import get_async_db
from app.dependencies import get_current_user
from app.models import User
from app.schemas.device import DeviceCreate, DeviceInfo, DeviceUpdate
from app.schemas.response import PagedData
from app.services.device_service import DeviceService

router = APIRouter()


@router.post("", response_model=DeviceInfo, status_code=status.HTTP_201_CREATED)
async def create_device(
    request: DeviceCreate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    device = await DeviceService.create(db, request, current_user)
    return DeviceInfo.model_validate(device)


@router.get("", response_model=PagedData[DeviceInfo])
async def list_devices(
    gateway_key: Optional[str] = Query(None, alias="gatewayId", description="网关 ID"),
    device_type: Optional[DeviceType] = Query(None, alias="type", description="设备类型"),
    state: Optional[ConnectionState] = Query(None, description="在线状态"),
    page: int = Query(1, ge=1, le=settings.MAX_PAGE),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    return await DeviceService.query(db, current_user, gateway_key, device_type, state, page, limit)


@router.get("/{device_id}", response_model=DeviceInfo)
async def get_device(
    device_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    device = await DeviceService.get_by_id(db, device_id, current_user)
    return DeviceInfo.model_validate(device)


@router.patch("/{device_id}", response_model=DeviceInfo)
async def update_device(
    device_id: int,
    request: DeviceUpdate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    device = await DeviceService.update(db, device_id, request, current_user)
    return DeviceInfo.model_validate(device)


@router.delete("/{device_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_device(
    device_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    await DeviceService.delete(db, device_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
