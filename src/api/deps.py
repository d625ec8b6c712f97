"""
接口公共依赖
从请求头解析当前用户，以及统一的响应格式
"""

from typing import Any, Dict, Optional

from fastapi import Header

from src.backend.client import backend_client
from src.models.profile import CurrentUser
from src.utils.errors import AuthenticationError


async def get_current_user(authorization: Optional[str] = Header(None)) -> CurrentUser:
    """
    根据 Bearer 令牌向后端换取用户身份

    Args:
        authorization: Authorization 请求头

    Returns:
        当前用户

    Raises:
        AuthenticationError: 未登录或令牌无效
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise AuthenticationError("Please log in first")
    token = authorization[7:].strip()

    user = await backend_client.get_user(token)
    metadata = user.get("user_metadata") or {}
    return CurrentUser(
        id=user["id"],
        token=token,
        email=user.get("email") or "",
        metadata_name=metadata.get("display_name") or "",
    )


def success(msg: str = "success", data: Any = None) -> Dict[str, Any]:
    """成功响应"""
    return {"code": 0, "msg": msg, "data": data}
