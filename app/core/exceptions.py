"""
IoT Monitor Backend - 业务异常

服务层只抛异常，由 main.py 中注册的处理器转换为 HTTP 响应
"""
from typing import Any, Optional

from fastapi import status

from app.schemas.response import ErrorCodes


class ServiceError(Exception):
    """服务层异常基类"""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: int = ErrorCodes.UNKNOWN_ERROR
    headers: Optional[dict] = None

    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.data = data


class RecordValidationError(ServiceError):
    """参数非法（日期格式、枚举取值等）"""
    code = ErrorCodes.VALIDATION_ERROR


class DuplicateKeyError(ServiceError):
    """唯一键冲突"""
    code = ErrorCodes.DUPLICATE_NAME


class RecordNotFoundError(ServiceError):
    """记录或所属实体不存在"""
    status_code = status.HTTP_404_NOT_FOUND
    code = ErrorCodes.NOT_FOUND


class PermissionDeniedError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = ErrorCodes.PERMISSION_DENIED


class AuthenticationError(ServiceError):
    """缺少 Token、Token 无效或用户不存在"""
    status_code = status.HTTP_401_UNAUTHORIZED
    code = ErrorCodes.AUTH_TOKEN_INVALID
    headers = {"WWW-Authenticate": "Bearer"}


class UserBlockedError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = ErrorCodes.AUTH_USER_DISABLED
