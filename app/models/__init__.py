"""
IoT Monitor Backend - Models 模块
"""
from app.models.user import User
from app.models.master import Master
from app.models.gateway import Gateway
from app.models.device import Device
from app.models.activity_log import ActivityLog
from app.models.fault import Fault

__all__ = [
    "User",
    "Master",
    "Gateway",
    "Device",
    "ActivityLog",
    "Fault",
]
