"""
IoT Monitor Backend - Core 模块
"""
from app.core.security import (
    verify_password,
    get_password_hash,
    token_claims,
    create_access_token,
    decode_access_token,
    token_user_id,
)
from app.core.exceptions import (
    ServiceError,
    RecordValidationError,
    DuplicateKeyError,
    RecordNotFoundError,
    PermissionDeniedError,
    AuthenticationError,
    UserBlockedError,
)

__all__ = [
    # Security
    "verify_password",
    "get_password_hash",
    "token_claims",
    "create_access_token",
    "decode_access_token",
    "token_user_id",
    # Exceptions
    "ServiceError",
    "RecordValidationError",
    "DuplicateKeyError",
    "RecordNotFoundError",
    "PermissionDeniedError",
    "AuthenticationError",
    "UserBlockedError",
]
