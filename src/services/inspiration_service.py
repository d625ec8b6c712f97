"""
灵感服务
管理灵感的记录、筛选、实践状态，以及灵感地图
"""

from typing import Any, Dict, List, Optional

from src.backend.client import SupabaseClient, backend_client, parse_record
from src.models.inspiration import (
    CATEGORIES, CATEGORY_IDS, CONTENT_MAX_LENGTH, INSPIRATION_FILTERS,
    BubbleMap, Inspiration, InspirationCreate, InspirationUpdate
)
from src.models.profile import CurrentUser
from src.services.canvas_service import layout_bubbles
from src.utils.errors import NotFoundError, ValidationError
from src.utils.logger import logger

TABLE = "inspirations"
QUICK_TAGS = ["#urgent", "#weekend", "#creative", "#relaxing"]


def title_from_content(content: str, words: int = 3) -> str:
    """取内容的前三个词作为标题"""
    return " ".join(content.split()[:words])


class InspirationService:
    """灵感服务"""

    def __init__(self, client: Optional[SupabaseClient] = None):
        """初始化灵感服务"""
        self.client = client or backend_client

    def capture_defaults(self) -> Dict[str, Any]:
        """记录灵感页面的初始状态"""
        return {
            "categories": CATEGORIES,
            "quick_tags": QUICK_TAGS,
            "category": None,
            "content": "",
        }

    def _clean_content(self, content: Optional[str]) -> str:
        cleaned = (content or "").strip()
        if not cleaned:
            raise ValidationError("Please enter your idea")
        if len(cleaned) > CONTENT_MAX_LENGTH:
            raise ValidationError(f"Idea must be at most {CONTENT_MAX_LENGTH} characters")
        return cleaned

    def _clean_category(self, category: Optional[str]) -> Optional[str]:
        if not category:
            return None
        if category not in CATEGORY_IDS:
            raise ValidationError(f"Unknown category: {category}")
        return category

    async def create_inspiration(self, user: CurrentUser, payload: InspirationCreate) -> Inspiration:
        """
        记录灵感

        Args:
            user: 当前用户
            payload: 灵感内容和分类

        Returns:
            保存后的灵感
        """
        content = self._clean_content(payload.content)
        row = await self.client.insert(TABLE, user.token, {
            "user_id": user.id,
            "title": title_from_content(content),
            "content": content,
            "category": self._clean_category(payload.category),
            "is_practiced": False,
        })
        inspiration = parse_record(Inspiration, row)
        logger.info(f"灵感保存成功: {inspiration.id}")
        return inspiration

    async def get_inspirations(self, user: CurrentUser, practiced_filter: str = "all",
                               limit: Optional[int] = None) -> List[Inspiration]:
        """
        获取灵感列表（新的在前）

        Args:
            user: 当前用户
            practiced_filter: 筛选条件
            limit: 数量限制
        """
        if practiced_filter not in INSPIRATION_FILTERS:
            raise ValidationError(f"Unknown filter: {practiced_filter}")
        filters: Dict[str, Any] = {"user_id": user.id}
        # 由后端筛选，数量限制作用于筛选后的结果
        if practiced_filter != "all":
            filters["is_practiced"] = practiced_filter == "practiced"
        rows = await self.client.select(
            TABLE, user.token,
            filters=filters,
            order="created_at.desc",
            limit=limit,
        )
        return [parse_record(Inspiration, r) for r in rows]

    async def get_bubble_map(self, user: CurrentUser, practiced_filter: str = "all") -> BubbleMap:
        """灵感地图：位置按全部灵感计算后再筛选"""
        if practiced_filter not in INSPIRATION_FILTERS:
            raise ValidationError(f"Unknown filter: {practiced_filter}")
        items = await self.get_inspirations(user)
        return layout_bubbles(items, practiced_filter)

    async def update_inspiration(self, user: CurrentUser, inspiration_id: str,
                                 payload: InspirationUpdate) -> Inspiration:
        """编辑内容、分类或实践状态"""
        values: Dict[str, Any] = {}
        if payload.content is not None:
            content = self._clean_content(payload.content)
            values["content"] = content
            values["title"] = title_from_content(content)
        if payload.category is not None:
            values["category"] = self._clean_category(payload.category)
        if payload.is_practiced is not None:
            values["is_practiced"] = payload.is_practiced
        if not values:
            raise ValidationError("Nothing to update")

        row = await self.client.update(TABLE, user.token, inspiration_id, values)
        logger.info(f"灵感更新成功: {inspiration_id}")
        return parse_record(Inspiration, row)

    async def toggle_practiced(self, user: CurrentUser, inspiration_id: str) -> Inspiration:
        """切换实践状态"""
        current = await self.client.select_one(
            TABLE, user.token, filters={"id": inspiration_id, "user_id": user.id}
        )
        if current is None:
            raise NotFoundError("Inspiration not found")
        return await self.update_inspiration(
            user, inspiration_id,
            InspirationUpdate(is_practiced=not current.get("is_practiced", False)),
        )

    async def delete_inspiration(self, user: CurrentUser, inspiration_id: str) -> bool:
        """删除灵感"""
        deleted = await self.client.delete(TABLE, user.token, inspiration_id)
        if deleted:
            logger.info(f"灵感删除成功: {inspiration_id}")
        else:
            logger.warning(f"灵感不存在: {inspiration_id}")
        return deleted


# 创建全局灵感服务实例
inspiration_service = InspirationService()
