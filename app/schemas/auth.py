"""
IoT Monitor Backend - 认证 Schema
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoginRequest(BaseModel):
    """登录请求"""
    username: str = Field(..., min_length=1, max_length=50, description="用户名")
    password: str = Field(..., min_length=1, description="密码")


class UserInfo(BaseModel):
    """用户信息"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: Optional[str] = None
    role: str
    state: str


class LoginResponse(BaseModel):
    """登录响应数据"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserInfo


class UserCreate(BaseModel):
    """注册用户请求"""
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=8)
    email: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_has_letter_and_digit(cls, value: str) -> str:
        """密码至少包含一个字母和一个数字"""
        if not any(ch.isalpha() for ch in value) or not any(ch.isdigit() for ch in value):
            raise ValueError("password must contain at least 1 letter and 1 number")
        return value
