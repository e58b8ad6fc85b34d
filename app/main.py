"""
IoT Monitor Backend - FastAPI 应用入口
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.core.exceptions import ServiceError
from app.database import init_db, SessionLocal
from app.api.v1.router import api_router
from app.api.health import router as health_router
from app.schemas.response import ErrorCodes, error_response

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # ==================== 启动 ====================
    print(f"🚀 启动 {settings.APP_NAME} v{settings.APP_VERSION}...")

    init_db()
    print("✅ 数据库初始化完成")

    create_default_admin()

    yield

    # ==================== 关闭 ====================
    print(f"🛑 关闭 {settings.APP_NAME}...")


def create_default_admin():
    """创建默认管理员账户（如果不存在）"""
    from app.constants import UserRole, UserState
    from app.models.user import User
    from app.core.security import get_password_hash

    db = SessionLocal()
    try:
        admin = db.query(User).filter(User.username == settings.DEFAULT_ADMIN_USERNAME).first()
        if not admin:
            admin = User(
                username=settings.DEFAULT_ADMIN_USERNAME,
                email=settings.DEFAULT_ADMIN_EMAIL,
                hashed_password=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD),
                role=UserRole.ADMIN.value,
                state=UserState.ACTIVATED.value,
            )
            db.add(admin)
            db.commit()
            print(f"✅ 创建默认管理员: {settings.DEFAULT_ADMIN_USERNAME}")
        else:
            print("ℹ️  管理员账户已存在")
    finally:
        db.close()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="IoT 监控后端 - 主站 / 网关 / 设备 / 活动日志 / 故障",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# ==================== 中间件 ====================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ==================== 异常处理 ====================


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """业务异常 -> 统一错误响应"""
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        headers=exc.headers,
        content=error_response(
            message=exc.message,
            code=exc.code,
            data=jsonable_encoder(exc.data),
        ).model_dump(mode="json"),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """请求参数校验失败统一返回 400"""
    errors = jsonable_encoder(
        [{key: value for key, value in error.items() if key != "ctx"} for error in exc.errors()]
    )
    message = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', []))}: {error.get('msg')}"
        for error in errors
    )
    return JSONResponse(
        status_code=400,
        content=error_response(
            message=message or "Validation error",
            code=ErrorCodes.VALIDATION_ERROR,
            data=errors,
        ).model_dump(mode="json"),
    )


# ==================== 路由注册 ====================

app.include_router(api_router, prefix=settings.API_PREFIX)

app.include_router(health_router)


@app.get("/", tags=["Root"])
async def root():
    """根路径 - 返回 API 基本信息"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "auth": f"{settings.API_PREFIX}/auth",
            "masters": f"{settings.API_PREFIX}/masters",
            "gateways": f"{settings.API_PREFIX}/gateways",
            "devices": f"{settings.API_PREFIX}/devices",
            "activityLogs": f"{settings.API_PREFIX}/activityLogs",
            "faults": f"{settings.API_PREFIX}/faults",
        },
    }
