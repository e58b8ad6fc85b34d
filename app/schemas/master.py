"""
IoT Monitor Backend - 主站 Schema
"""
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MasterCreate(BaseModel):
    """创建主站请求"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    master_key: str = Field(..., min_length=1, max_length=100, description="主站 Key（全局唯一）")
    name: str = Field(..., min_length=1, max_length=100, description="名称")
    description: Optional[str] = Field(None, description="描述")


class MasterUpdate(BaseModel):
    """更新主站请求，masterKey 不可修改"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
    )

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None


class MasterInfo(BaseModel):
    """主站信息"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    master_key: str = Field(validation_alias=AliasChoices("masterKey", "master_key"))
    name: str
    description: Optional[str] = None
    user: int = Field(validation_alias=AliasChoices("user", "user_id"))
    created_at: datetime = Field(validation_alias=AliasChoices("createdAt", "created_at"))
    updated_at: datetime = Field(validation_alias=AliasChoices("updatedAt", "updated_at"))
