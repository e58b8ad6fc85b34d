"""
IoT Monitor Backend - FastAPI 依赖注入
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from jose import JWTError

from app.database import get_async_db
from app.models.user import User
from app.core.exceptions import AuthenticationError, UserBlockedError
from app.core.security import token_user_id


# 缺少凭据时不自动报错，由 get_current_user 统一返回 401
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_async_db),
) -> User:
    """
    获取当前认证用户

    Raises:
        AuthenticationError: Token 缺失、无效，或用户已删除 (401)
        UserBlockedError: 用户被封禁 (403)
    """
    if credentials is None:
        raise AuthenticationError("Please authenticate")

    try:
        user_id = token_user_id(credentials.credentials)
    except JWTError:
        raise AuthenticationError("Please authenticate")

    user = await db.get(User, user_id)
    if user is None:
        raise AuthenticationError("Please authenticate")

    if not user.is_active:
        raise UserBlockedError("User is blocked")

    return user
