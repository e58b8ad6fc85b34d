"""
IoT Monitor Backend - 数据库连接

SQLAlchemy 2.0 风格。业务请求走异步引擎 (aiosqlite)，
建表和初始化默认管理员走同步引擎。
"""
import os
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from app.config import settings

IS_SQLITE = settings.database_url_expanded.startswith("sqlite")


def ensure_db_directory():
    """SQLite 文件所在目录不存在时创建"""
    db_url = settings.database_url_expanded
    if db_url.startswith("sqlite:///"):
        db_dir = os.path.dirname(db_url[len("sqlite:///"):])
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)


def enable_sqlite_foreign_keys(engine: Engine):
    """SQLite 默认不检查外键，每个新连接都要打开"""

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


ensure_db_directory()

_connect_args = {"check_same_thread": False} if IS_SQLITE else {}

# ==================== 同步连接 (建表、初始化数据) ====================
engine = create_engine(
    settings.database_url_expanded,
    connect_args=_connect_args,
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ==================== 异步连接 (业务请求) ====================
ASYNC_DATABASE_URL = settings.database_url_expanded.replace("sqlite:///", "sqlite+aiosqlite:///")

async_engine = create_async_engine(
    ASYNC_DATABASE_URL,
    connect_args=_connect_args,
    echo=settings.DEBUG,
)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)

if IS_SQLITE:
    enable_sqlite_foreign_keys(engine)
    enable_sqlite_foreign_keys(async_engine.sync_engine)


class Base(DeclarativeBase):
    pass


async def get_async_db():
    """请求级异步会话"""
    async with AsyncSessionLocal() as session:
        yield session


def init_db():
    """创建所有表（已存在的表不变）"""
    # 导入模型以注册到 Base.metadata
    from app.models import user, master, gateway, device, activity_log, fault  # noqa

    Base.metadata.create_all(bind=engine)
