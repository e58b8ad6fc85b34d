"""
IoT Monitor Backend - 配置管理

使用 Pydantic Settings 管理所有配置项，支持环境变量和 .env 文件
"""
from functools import lru_cache
from typing import List
import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ==================== 应用信息 ====================
    APP_NAME: str = "IoT Monitor Backend"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # ==================== 服务地址 ====================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    API_PREFIX: str = "/v1"

    # ==================== 数据库 ====================
    DATABASE_URL: str = "sqlite:///~/iot-monitor/data/monitor.db"

    @property
    def database_url_expanded(self) -> str:
        """展开数据库 URL 中的 ~ 路径"""
        url = self.DATABASE_URL
        if url.startswith("sqlite:///~"):
            path = url[10:]  # 去掉 sqlite:///
            return f"sqlite:///{os.path.expanduser(path)}"
        return url

    # ==================== JWT 认证 ====================
    SECRET_KEY: str = "change-this-secret-key-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # ==================== 默认管理员 ====================
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"
    DEFAULT_ADMIN_EMAIL: str = "admin@example.com"

    # ==================== 分页 ====================
    DEFAULT_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 100
    # 页码上限，保证 (page-1)*limit 不超出 SQLite INTEGER
    MAX_PAGE: int = 1_000_000

    # ==================== CORS ====================
    CORS_ORIGINS: str = "*"

    @property
    def cors_origins_list(self) -> List[str]:
        """解析 CORS 源列表"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    # ==================== 日志 ====================
    LOG_LEVEL: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()


# 便捷访问
settings = get_settings()
