"""
IoT Monitor Backend - 统一响应模型

错误统一走 ApiResponse 信封；列表统一走 PagedData
"""
from typing import Any, Optional, Generic, TypeVar
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """统一 API 响应模型"""
    success: bool = Field(..., description="操作是否成功")
    code: int = Field(default=0, description="业务状态码，0=成功")
    message: str = Field(default="", description="响应消息")
    data: Optional[T] = Field(default=None, description="响应数据")
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="响应时间戳"
    )


class PagedData(BaseModel, Generic[T]):
    """分页数据: {results, page, limit, totalPages, totalResults}"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    results: list[T] = Field(default_factory=list, description="数据列表")
    page: int = Field(default=1, description="当前页")
    limit: int = Field(default=10, description="每页大小")
    total_pages: int = Field(default=0, description="总页数")
    total_results: int = Field(default=0, description="总数")


# ==================== 错误码定义 ====================

class ErrorCodes:
    """业务错误码"""

    # 通用错误 (1xxx)
    UNKNOWN_ERROR = 1000
    VALIDATION_ERROR = 1001
    NOT_FOUND = 1002
    INTERNAL_ERROR = 1003
    DUPLICATE_NAME = 1004

    # 认证错误 (2xxx)
    AUTH_INVALID_CREDENTIALS = 2001
    AUTH_TOKEN_INVALID = 2003
    AUTH_USER_DISABLED = 2004
    PERMISSION_DENIED = 2005


# ==================== 响应构造函数 ====================

def success_response(
    data: Any = None,
    message: str = "OK",
    code: int = 0,
) -> ApiResponse:
    """构造成功响应"""
    return ApiResponse(
        success=True,
        code=code,
        message=message,
        data=data,
    )


def error_response(
    message: str,
    code: int = ErrorCodes.UNKNOWN_ERROR,
    data: Any = None,
) -> ApiResponse:
    """构造错误响应"""
    return ApiResponse(
        success=False,
        code=code,
        message=message,
        data=data,
    )
