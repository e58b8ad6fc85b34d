"""
IoT Monitor Backend - 故障 Schema
"""
from datetime import datetime
from typing import Optional, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.constants import RecordType


class FaultCreate(BaseModel):
    """创建故障请求"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    gateway_id: str = Field(..., min_length=1, description="网关 ID")
    device_id: str = Field(..., min_length=1, description="设备 ID（网关内）")
    category: str = Field(..., min_length=1, description="故障分类，如 LoggerFault")
    type: RecordType = Field(..., description="级别")
    event: str = Field(..., min_length=1, description="事件")
    position: float = Field(..., description="位置")
    description: Optional[str] = None
    reason: Optional[str] = None
    suggest: Optional[str] = None
    fault_data: Optional[dict[str, Any]] = None


class FaultUpdate(BaseModel):
    """更新故障请求"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    gateway_id: Optional[str] = Field(None, min_length=1)
    device_id: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    type: Optional[RecordType] = None
    event: Optional[str] = Field(None, min_length=1)
    position: Optional[float] = None
    description: Optional[str] = None
    reason: Optional[str] = None
    suggest: Optional[str] = None
    fault_data: Optional[dict[str, Any]] = None


class FaultInfo(BaseModel):
    """故障条目"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    gateway: int = Field(validation_alias=AliasChoices("gateway", "gateway_id"))
    device: int = Field(validation_alias=AliasChoices("device", "device_id"))
    category: str
    type: str
    event: str
    position: float
    description: Optional[str] = None
    reason: Optional[str] = None
    suggest: Optional[str] = None
    fault_data: Optional[dict[str, Any]] = Field(
        None, validation_alias=AliasChoices("faultData", "fault_data")
    )
    created_at: datetime = Field(validation_alias=AliasChoices("createdAt", "created_at"))
    updated_at: datetime = Field(validation_alias=AliasChoices("updatedAt", "updated_at"))
