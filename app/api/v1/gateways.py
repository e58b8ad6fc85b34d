"""
IoT Monitor Backend - 网关管理 API
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.constants import ConnectionState
from app.database import get_async_db
from app.dependencies import get_current_user
from app.models import User
from app.schemas.gateway import GatewayCreate, GatewayInfo, GatewayUpdate
from app.schemas.response import PagedData
from app.services.gateway_service import GatewayService

router = APIRouter()


@router.post("", response_model=GatewayInfo, status_code=status.HTTP_201_CREATED)
async def create_gateway(
    request: GatewayCreate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    gateway = await GatewayService.create(db, request, current_user)
    return GatewayInfo.model_validate(gateway)


@router.get("", response_model=PagedData[GatewayInfo])
async def list_gateways(
    master_key: Optional[str] = Query(None, alias="masterKey", description="主站 Key"),
    state: Optional[ConnectionState] = Query(None, description="在线状态"),
    page: int = Query(1, ge=1, le=settings.MAX_PAGE),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    return await GatewayService.query(db, current_user, master_key, state, page, limit)


@router.get("/{gateway_id}", response_model=GatewayInfo)
async def get_gateway(
    gateway_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    gateway = await GatewayService.get_by_id(db, gateway_id, current_user)
    return GatewayInfo.model_validate(gateway)


@router.patch("/{gateway_id}", response_model=GatewayInfo)
async def update_gateway(
    gateway_id: int,
    request: GatewayUpdate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    gateway = await GatewayService.update(db, gateway_id, request, current_user)
    return GatewayInfo.model_validate(gateway)


@router.delete("/{gateway_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_gateway(
    gateway_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    """删除网关，同时删除其设备与故障"""
    await GatewayService.delete(db, gateway_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
