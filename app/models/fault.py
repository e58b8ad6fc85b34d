"""
IoT Monitor Backend - 故障模型
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, DateTime, Integer, Float, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Fault(Base):
    """故障模型"""

    __tablename__ = "faults"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # 来源（由 gatewayId / deviceId 解析得到）
    gateway_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("gateways.id"), nullable=False, index=True
    )
    device_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("devices.id"), nullable=False, index=True
    )

    # 分类信息
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    event: Mapped[str] = mapped_column(String(100), nullable=False)
    position: Mapped[float] = mapped_column(Float, nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    suggest: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    fault_data: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self):
        return f"<Fault {self.id}: {self.category}/{self.event}>"
