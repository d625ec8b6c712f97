"""
用户资料服务
只读查询用户显示名称
"""

from typing import Optional

from src.backend.client import SupabaseClient, backend_client
from src.models.profile import CurrentUser, Profile
from src.utils.config import settings

TABLE = "profiles"


class ProfileService:
    """用户资料服务"""

    def __init__(self, client: Optional[SupabaseClient] = None):
        """初始化资料服务"""
        self.client = client or backend_client

    async def get_profile(self, user: CurrentUser) -> Profile:
        """
        获取用户资料

        资料不存在时依次回退到注册时填写的名称、默认名称

        Args:
            user: 当前用户

        Returns:
            用户资料
        """
        row = await self.client.select_one(TABLE, user.token, filters={"id": user.id})
        display_name = (
            (row or {}).get("display_name")
            or user.metadata_name
            or settings.default_display_name
        )
        return Profile(id=user.id, display_name=display_name)


# 创建全局资料服务实例
profile_service = ProfileService()
