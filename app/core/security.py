"""
IoT Monitor Backend - 安全模块

密码哈希（bcrypt）与 JWT 签发、校验。Token 的 sub 是用户 id，
另带 username / role 便于排查问题，鉴权时只信任 sub。
"""
from datetime import datetime, timedelta
import logging
from typing import Optional, Dict, Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def token_claims(user_id: int, username: str, role: str) -> Dict[str, Any]:
    """用户 -> Token 载荷"""
    return {"sub": str(user_id), "username": username, "role": role}


def create_access_token(
    claims: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    签发 Access Token

    Args:
        claims: 由 token_claims 生成的载荷
        expires_delta: 有效期，默认 ACCESS_TOKEN_EXPIRE_MINUTES
    """
    issued_at = datetime.utcnow()
    expire = issued_at + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    payload = dict(claims, exp=expire, iat=issued_at)
    logger.debug(f"[AUTH] issue token: sub={payload.get('sub')}, exp={expire}")
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    解码并验证 Token（签名 + 过期时间）

    Raises:
        JWTError: Token 无效或已过期
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.debug(f"[AUTH] decode failed: {type(e).__name__}: {e}")
        raise


def token_user_id(token: str) -> int:
    """
    取出 Token 对应的用户 id

    Raises:
        JWTError: Token 无效、已过期或 sub 不是用户 id
    """
    subject = decode_access_token(token).get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise JWTError("Token subject is not a user id")
