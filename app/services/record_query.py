"""
IoT Monitor Backend - 记录查询构建

把请求级过滤参数（所属实体、时间范围）翻译为 SQLAlchemy 查询。
排序固定为 created_at 降序、id 降序，同一时间戳下后插入的记录排在前面。
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Type

from sqlalchemy import Select, and_, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import RecordValidationError


def parse_datetime(value: str, field: str) -> datetime:
    """
    解析时间字符串

    支持 ISO 8601（"T" 或空格分隔）以及纯日期，例如 "2021-03-15 00:00:00"。
    带时区的时间转换为 UTC 后去掉时区信息，与库中存储的格式一致。

    Raises:
        RecordValidationError: 无法解析
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise RecordValidationError(
            f'"{field}" must be a valid date',
            data={"field": field, "value": value},
        )

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def ensure_choice(choices: Type[Enum], value: Any, field: str) -> str:
    """校验取值属于封闭集合，返回存储用的字符串"""
    try:
        return choices(value).value
    except ValueError:
        allowed = ", ".join(member.value for member in choices)
        raise RecordValidationError(
            f'"{field}" must be one of [{allowed}]',
            data={"field": field, "value": value},
        )


def newest_first(stmt: Select, model: Any) -> Select:
    """最新在前；时间相同则按插入顺序倒序"""
    return stmt.order_by(desc(model.created_at), desc(model.id))


class RecordQuery:
    """
    记录查询构建器

    用法:
        query = RecordQuery(ActivityLog).where(ActivityLog.master_id == master.id)
        query.created_between(from_, to)
        if not query.is_empty:
            stmt = query.statement()
    """

    def __init__(self, model: Any):
        self.model = model
        self.conditions: list = []
        self.is_empty = False

    def where(self, *conditions) -> "RecordQuery":
        self.conditions.extend(conditions)
        return self

    def created_between(
        self,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> "RecordQuery":
        """
        按创建时间过滤（闭区间）

        两端都先解析，任何一端格式错误都让整个请求失败；
        start 晚于 end 时结果为空而不是报错。
        """
        start_at = parse_datetime(start, "from") if start else None
        end_at = parse_datetime(end, "to") if end else None

        if start_at is not None and end_at is not None and start_at > end_at:
            self.is_empty = True

        if start_at is not None:
            self.conditions.append(self.model.created_at >= start_at)
        if end_at is not None:
            self.conditions.append(self.model.created_at <= end_at)
        return self

    def statement(self) -> Select:
        stmt = select(self.model)
        if self.conditions:
            stmt = stmt.where(and_(*self.conditions))
        return newest_first(stmt, self.model)

    async def latest(self, db: AsyncSession) -> Optional[Any]:
        """返回最新的一条记录，没有则返回 None"""
        if self.is_empty:
            return None
        result = await db.execute(self.statement().limit(1))
        return result.scalars().first()
