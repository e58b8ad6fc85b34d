"""
IoT Monitor Backend - 活动日志 API

创建接口不需要认证（由现场主站直接上报），其余接口需要登录
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_async_db
from app.dependencies import get_current_user
from app.models import User
from app.schemas.activity_log import ActivityLogCreate, ActivityLogInfo, ActivityLogUpdate
from app.schemas.response import PagedData
from app.services.activity_log_service import ActivityLogService

router = APIRouter()


@router.post(
    "",
    response_model=ActivityLogInfo,
    status_code=status.HTTP_201_CREATED,
    summary="创建活动日志",
)
async def create_activity_log(
    request: ActivityLogCreate,
    db: AsyncSession = Depends(get_async_db),
):
    log_entry = await ActivityLogService.create(db, request)
    return ActivityLogInfo.model_validate(log_entry)


@router.get(
    "",
    response_model=PagedData[ActivityLogInfo],
    summary="查询活动日志",
    description="分页查询活动日志，支持按主站与时间范围过滤，最新在前",
)
async def list_activity_logs(
    master_key: Optional[str] = Query(None, alias="masterKey", description="主站 Key"),
    start: Optional[str] = Query(None, alias="from", description="开始时间，如 2021-03-15 00:00:00"),
    end: Optional[str] = Query(None, alias="to", description="结束时间"),
    page: int = Query(1, ge=1, le=settings.MAX_PAGE, description="页码"),
    limit: int = Query(
        settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT, description="每页数量"
    ),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    return await ActivityLogService.query(db, master_key, start, end, page, limit)


@router.get(
    "/latest",
    response_model=ActivityLogInfo,
    summary="获取最新活动日志",
)
async def get_latest_activity_log(
    master_key: Optional[str] = Query(None, alias="masterKey", description="主站 Key"),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    log_entry = await ActivityLogService.get_latest(db, master_key)
    return ActivityLogInfo.model_validate(log_entry)


@router.get("/{activity_log_id}", response_model=ActivityLogInfo, summary="获取活动日志")
async def get_activity_log(
    activity_log_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    log_entry = await ActivityLogService.get_by_id(db, activity_log_id)
    return ActivityLogInfo.model_validate(log_entry)


@router.patch("/{activity_log_id}", response_model=ActivityLogInfo, summary="更新活动日志")
async def update_activity_log(
    activity_log_id: int,
    request: ActivityLogUpdate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    log_entry = await ActivityLogService.update(db, activity_log_id, request)
    return ActivityLogInfo.model_validate(log_entry)


@router.delete(
    "/{activity_log_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="删除活动日志",
)
async def delete_activity_log(
    activity_log_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
):
    await ActivityLogService.delete(db, activity_log_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
