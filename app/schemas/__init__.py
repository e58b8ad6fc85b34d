"""
IoT Monitor Backend - Schemas 模块
"""
from app.schemas.response import (
    ApiResponse,
    PagedData,
    ErrorCodes,
    success_response,
    error_response,
)
from app.schemas.auth import (
    LoginRequest,
    UserInfo,
    LoginResponse,
    UserCreate,
)
from app.schemas.master import MasterCreate, MasterUpdate, MasterInfo
from app.schemas.gateway import GatewayCreate, GatewayUpdate, GatewayInfo
from app.schemas.device import DeviceCreate, DeviceUpdate, DeviceInfo
from app.schemas.activity_log import ActivityLogCreate, ActivityLogUpdate, ActivityLogInfo
from app.schemas.fault import FaultCreate, FaultUpdate, FaultInfo

__all__ = [
    # Response
    "ApiResponse",
    "PagedData",
    "ErrorCodes",
    "success_response",
    "error_response",
    # Auth
    "LoginRequest",
    "UserInfo",
    "LoginResponse",
    "UserCreate",
    # Master
    "MasterCreate",
    "MasterUpdate",
    "MasterInfo",
    # Gateway
    "GatewayCreate",
    "GatewayUpdate",
    "GatewayInfo",
    # Device
    "DeviceCreate",
    "DeviceUpdate",
    "DeviceInfo",
    # ActivityLog
    "ActivityLogCreate",
    "ActivityLogUpdate",
    "ActivityLogInfo",
    # Fault
    "FaultCreate",
    "FaultUpdate",
    "FaultInfo",
]
