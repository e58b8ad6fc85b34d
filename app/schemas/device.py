"""
IoT Monitor Backend - 设备 Schema
"""
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.constants import ConnectionState, DeviceType


class DeviceCreate(BaseModel):
    """创建设备请求"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    device_id: str = Field(..., min_length=1, max_length=100, description="设备 ID（网关内唯一）")
    gateway_id: str = Field(..., min_length=1, description="所属网关 ID")
    name: str = Field(..., min_length=1, max_length=100)
    type: DeviceType = Field(..., description="设备类型")
    description: Optional[str] = None
    state: ConnectionState = ConnectionState.OFFLINE


class DeviceUpdate(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
    )

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    type: Optional[DeviceType] = None
    state: Optional[ConnectionState] = None


class DeviceInfo(BaseModel):
    """设备信息"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    device_id: str = Field(validation_alias=AliasChoices("deviceId", "device_key"))
    name: str
    description: Optional[str] = None
    type: str
    state: str
    gateway: int = Field(validation_alias=AliasChoices("gateway", "gateway_id"))
    created_at: datetime = Field(validation_alias=AliasChoices("createdAt", "created_at"))
    updated_at: datetime = Field(validation_alias=AliasChoices("updatedAt", "updated_at"))
