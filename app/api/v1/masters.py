"""
IoT Monitor Backend - 主站管理 API
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_async_db
from app.dependencies import get_current_user
from app.models import User
from app.schemas.master import MasterCreate, MasterInfo, MasterUpdate
from app.schemas.response import PagedData
from app.services.master_service import MasterService

router = APIRouter()


@router.post("", response_model=MasterInfo, status_code=status.HTTP_201_CREATED)
async def create_master(
    request: MasterCreate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    """创建主站，所属用户为当前用户"""
    master = await MasterService.create(db, request, current_user)
    return MasterInfo.model_validate(master)


@router.get("", response_model=PagedData[MasterInfo])
async def list_masters(
    name: Optional[str] = Query(None, description="名称（模糊匹配）"),
    page: int = Query(1, ge=1, le=settings.MAX_PAGE),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    """
    列出主站

    - 普通用户只能看到自己的主站
    - 管理员可以看到所有主站
    """
    return await MasterService.query(db, current_user, name, page, limit)


@router.get("/{master_id}", response_model=MasterInfo)
async def get_master(
    master_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    master = await MasterService.get_by_id(db, master_id, current_user)
    return MasterInfo.model_validate(master)


@router.patch("/{master_id}", response_model=MasterInfo)
async def update_master(
    master_id: int,
    request: MasterUpdate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    """更新主站名称 / 描述，masterKey 不可修改"""
    master = await MasterService.update(db, master_id, request, current_user)
    return MasterInfo.model_validate(master)


@router.delete("/{master_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_master(
    master_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    await MasterService.delete(db, master_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
