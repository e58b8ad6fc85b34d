"""
IoT Monitor Backend - 网关 Schema
"""
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.constants import ConnectionState


class GatewayCreate(BaseModel):
    """创建网关请求"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    gateway_id: str = Field(..., min_length=1, max_length=100, description="网关 ID（全局唯一）")
    master_key: str = Field(..., min_length=1, description="所属主站 Key")
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    state: ConnectionState = ConnectionState.OFFLINE


class GatewayUpdate(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
    )

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    state: Optional[ConnectionState] = None


class GatewayInfo(BaseModel):
    """网关信息"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    gateway_id: str = Field(validation_alias=AliasChoices("gatewayId", "gateway_key"))
    name: str
    description: Optional[str] = None
    state: str
    master: int = Field(validation_alias=AliasChoices("master", "master_id"))
    created_at: datetime = Field(validation_alias=AliasChoices("createdAt", "created_at"))
    updated_at: datetime = Field(validation_alias=AliasChoices("updatedAt", "updated_at"))
