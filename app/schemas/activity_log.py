"""
IoT Monitor Backend - 活动日志 Schema
"""
from datetime import datetime
from typing import Optional, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.constants import ActivityLogCategory, RecordType


class ActivityLogCreate(BaseModel):
    """创建活动日志请求"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    master_key: str = Field(..., min_length=1, description="主站 Key")
    category: ActivityLogCategory = Field(..., description="分类")
    type: RecordType = Field(..., description="级别")
    description: Optional[str] = Field(None, description="描述")
    activity_log_data: Optional[dict[str, Any]] = Field(None, description="附加数据")


class ActivityLogUpdate(BaseModel):
    """更新活动日志请求（仅更新传入的字段）"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    master_key: Optional[str] = Field(None, min_length=1)
    category: Optional[ActivityLogCategory] = None
    type: Optional[RecordType] = None
    description: Optional[str] = None
    activity_log_data: Optional[dict[str, Any]] = None


class ActivityLogInfo(BaseModel):
    """活动日志条目"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    master: int = Field(validation_alias=AliasChoices("master", "master_id"))
    category: str
    type: str
    description: Optional[str] = None
    activity_log_data: Optional[dict[str, Any]] = Field(
        None, validation_alias=AliasChoices("activityLogData", "activity_log_data")
    )
    created_at: datetime = Field(validation_alias=AliasChoices("createdAt", "created_at"))
    updated_at: datetime = Field(validation_alias=AliasChoices("updatedAt", "updated_at"))
