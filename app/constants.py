"""
IoT Monitor Backend - 枚举常量

所有封闭取值集合都在这里定义，请求 Schema 与服务层共用
"""
from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class UserState(str, Enum):
    ACTIVATED = "ACTIVATED"
    BLOCKED = "BLOCKED"


class ConnectionState(str, Enum):
    """网关 / 设备在线状态"""
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"


class DeviceType(str, Enum):
    LOGGER = "LOGGER"
    INVERTER = "INVERTER"
    SENSOR = "SENSOR"


class ActivityLogCategory(str, Enum):
    """活动日志分类"""
    GENERAL = "General"
    MASTER = "Master"
    DEVICES = "Devices"
    DEVICE_LOGS = "DeviceLogs"
    FAULT = "Fault"


class RecordType(str, Enum):
    """事件级别（活动日志与故障共用）"""
    SUCCESS = "Success"
    ERROR = "Error"
    WARNING = "Warning"
