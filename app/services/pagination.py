"""
IoT Monitor Backend - 分页

对任意 select 语句做计数 + 分页，并用给定的 Schema 转换结果
"""
import math
from typing import Type

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.response import PagedData


def empty_page(page: int, limit: int) -> PagedData:
    return PagedData(results=[], page=page, limit=limit, total_pages=0, total_results=0)


async def paginate(
    db: AsyncSession,
    stmt: Select,
    schema: Type[BaseModel],
    page: int = 1,
    limit: int = 10,
) -> PagedData:
    """
    分页查询

    Args:
        db: 数据库会话
        stmt: 已带过滤与排序的查询
        schema: 结果转换用的 Schema（from_attributes）
        page: 页码，从 1 开始
        limit: 每页数量
    """
    # 查询总数
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar() or 0

    if total == 0:
        return empty_page(page, limit)

    # 计算分页
    total_pages = math.ceil(total / limit)
    offset = (page - 1) * limit

    result = await db.execute(stmt.offset(offset).limit(limit))
    rows = result.scalars().all()

    return PagedData(
        results=[schema.model_validate(row) for row in rows],
        page=page,
        limit=limit,
        total_pages=total_pages,
        total_results=total,
    )
