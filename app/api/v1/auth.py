"""
IoT Monitor Backend - 认证 API

提供用户注册、登录、获取当前用户
"""
from datetime import datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.constants import UserRole, UserState
from app.core.exceptions import DuplicateKeyError
from app.core.security import (
    create_access_token,
    get_password_hash,
    token_claims,
    verify_password,
)
from app.database import get_async_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.auth import LoginRequest, LoginResponse, UserCreate, UserInfo
from app.schemas.response import ErrorCodes, error_response
from app.services.persistence import commit_unique

router = APIRouter()


def _login_response(user: User) -> LoginResponse:
    access_token = create_access_token(token_claims(user.id, user.username, user.role))
    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserInfo.model_validate(user),
    )


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: UserCreate,
    db: AsyncSession = Depends(get_async_db),
):
    """注册普通用户，成功后直接返回 Token"""
    existing = await db.execute(select(User.id).where(User.username == request.username))
    if existing.first() is not None:
        raise DuplicateKeyError("Username already taken")

    user = User(
        username=request.username,
        email=request.email,
        hashed_password=get_password_hash(request.password),
        role=UserRole.USER.value,
        state=UserState.ACTIVATED.value,
    )
    db.add(user)
    await commit_unique(db, "Username already taken")
    await db.refresh(user)

    return _login_response(user)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_async_db),
):
    """
    用户登录

    验证用户名和密码，成功后返回 JWT Token
    """
    result = await db.execute(select(User).where(User.username == request.username))
    user = result.scalar_one_or_none()

    if not user or not verify_password(request.password, user.hashed_password):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=error_response(
                code=ErrorCodes.AUTH_INVALID_CREDENTIALS,
                message="Incorrect username or password",
            ).model_dump(mode="json"),
        )

    if not user.is_active:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content=error_response(
                code=ErrorCodes.AUTH_USER_DISABLED,
                message="User is blocked",
            ).model_dump(mode="json"),
        )

    # 更新最后登录时间
    user.last_login = datetime.utcnow()
    await db.commit()

    return _login_response(user)


@router.get("/me", response_model=UserInfo)
async def get_current_user_info(
    current_user: User = Depends(get_current_user),
):
    """获取当前用户信息"""
    return UserInfo.model_validate(current_user)
