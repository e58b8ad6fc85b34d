"""
IoT Monitor Backend - 设备模型
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, DateTime, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.constants import ConnectionState
from app.database import Base


class Device(Base):
    """设备模型，deviceId 在所属网关内唯一"""

    __tablename__ = "devices"
    __table_args__ = (
        UniqueConstraint("gateway_id", "device_key", name="uq_device_gateway_key"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    device_key: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    state: Mapped[str] = mapped_column(String(20), default=ConnectionState.OFFLINE.value)

    gateway_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("gateways.id"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self):
        return f"<Device {self.id}: {self.device_key}>"
