"""
IoT Monitor Backend - API v1 路由聚合
"""
from fastapi import APIRouter

from app.api.v1 import auth, masters, gateways, devices, activity_logs, faults

api_router = APIRouter()

# 认证相关
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])

# 主站 / 网关 / 设备
api_router.include_router(masters.router, prefix="/masters", tags=["Masters"])
api_router.include_router(gateways.router, prefix="/gateways", tags=["Gateways"])
api_router.include_router(devices.router, prefix="/devices", tags=["Devices"])

# 事件记录
api_router.include_router(activity_logs.router, prefix="/activityLogs", tags=["ActivityLogs"])
api_router.include_router(faults.router, prefix="/faults", tags=["Faults"])
