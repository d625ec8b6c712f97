"""
日记服务
管理日记的保存、查询、更新、删除，以及画布回顾
"""

from datetime import date
from typing import Any, Dict, List, Optional

from src.backend.client import SupabaseClient, backend_client, parse_record
from src.models.diary import (
    DEFAULT_MOOD, DEFAULT_WEATHER, MOOD_IDS, MOOD_OPTIONS, TITLE_MAX_LENGTH,
    WEATHER_IDS, WEATHER_OPTIONS, CanvasView, DiaryEntry, DiaryEntryCreate,
    DiaryEntryUpdate
)
from src.models.profile import CurrentUser
from src.services.canvas_service import CANVAS_FILTERS, layout_sticky_notes
from src.utils.dates import format_day_header, today
from src.utils.errors import ValidationError
from src.utils.logger import logger

TABLE = "diary_entries"


class DiaryService:
    """日记服务"""

    def __init__(self, client: Optional[SupabaseClient] = None):
        """初始化日记服务"""
        self.client = client or backend_client

    def editor_defaults(self, on: Optional[date] = None) -> Dict[str, Any]:
        """
        写日记页面的初始状态

        Returns:
            日期标题、天气/心情选项及默认值
        """
        on = on or today()
        return {
            "date": on,
            "date_label": format_day_header(on),
            "weather_options": WEATHER_OPTIONS,
            "mood_options": MOOD_OPTIONS,
            "weather": DEFAULT_WEATHER,
            "mood": DEFAULT_MOOD,
            "title": "",
            "content": "",
        }

    def _clean_title(self, title: Optional[str]) -> Optional[str]:
        cleaned = (title or "").strip()
        if len(cleaned) > TITLE_MAX_LENGTH:
            raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
        return cleaned or None

    def _check_tags(self, mood: Optional[str], weather: Optional[str]) -> None:
        if mood is not None and mood not in MOOD_IDS:
            raise ValidationError(f"Unknown mood: {mood}")
        if weather is not None and weather not in WEATHER_IDS:
            raise ValidationError(f"Unknown weather: {weather}")

    async def create_entry(self, user: CurrentUser, payload: DiaryEntryCreate,
                           on: Optional[date] = None) -> DiaryEntry:
        """
        保存日记

        Args:
            user: 当前用户
            payload: 日记内容
            on: 日记日期，请求体中的 entry_date 优先，默认今天

        Returns:
            保存后的日记

        Raises:
            ValidationError: 内容为空或字段不合法
        """
        content = (payload.content or "").strip()
        if not content:
            raise ValidationError("Please write something before saving")
        self._check_tags(payload.mood, payload.weather)

        row = await self.client.insert(TABLE, user.token, {
            "user_id": user.id,
            "title": self._clean_title(payload.title),
            "content": content,
            "mood": payload.mood,
            "weather": payload.weather,
            "entry_date": (payload.entry_date or on or today()).isoformat(),
        })
        entry = parse_record(DiaryEntry, row)
        logger.info(f"日记保存成功: {entry.id}")
        return entry

    async def get_entries_by_date(self, user: CurrentUser, on: date) -> List[DiaryEntry]:
        """
        获取指定日期的日记

        Args:
            user: 当前用户
            on: 日期

        Returns:
            日记列表（新的在前）
        """
        rows = await self.client.select(
            TABLE, user.token,
            filters={"user_id": user.id, "entry_date": on},
            order="created_at.desc",
        )
        return [parse_record(DiaryEntry, r) for r in rows]

    async def get_entries(self, user: CurrentUser, limit: Optional[int] = None) -> List[DiaryEntry]:
        """获取用户全部日记（新的在前）"""
        rows = await self.client.select(
            TABLE, user.token,
            filters={"user_id": user.id},
            order="entry_date.desc,created_at.desc",
            limit=limit,
        )
        return [parse_record(DiaryEntry, r) for r in rows]

    async def get_latest_entry(self, user: CurrentUser) -> Optional[DiaryEntry]:
        """获取最近一篇日记，没有时返回 None"""
        entries = await self.get_entries(user, limit=1)
        return entries[0] if entries else None

    async def update_entry(self, user: CurrentUser, entry_id: str,
                           payload: DiaryEntryUpdate) -> DiaryEntry:
        """
        更新日记

        Args:
            user: 当前用户
            entry_id: 日记ID
            payload: 需要更新的字段

        Returns:
            更新后的日记
        """
        values: Dict[str, Any] = {}
        if payload.content is not None:
            content = payload.content.strip()
            if not content:
                raise ValidationError("Please write something before saving")
            values["content"] = content
        if payload.title is not None:
            values["title"] = self._clean_title(payload.title)
        self._check_tags(payload.mood, payload.weather)
        if payload.mood is not None:
            values["mood"] = payload.mood
        if payload.weather is not None:
            values["weather"] = payload.weather
        if not values:
            raise ValidationError("Nothing to update")

        row = await self.client.update(TABLE, user.token, entry_id, values)
        logger.info(f"日记更新成功: {entry_id}")
        return parse_record(DiaryEntry, row)

    async def delete_entry(self, user: CurrentUser, entry_id: str) -> bool:
        """
        删除日记

        Returns:
            是否删除成功
        """
        deleted = await self.client.delete(TABLE, user.token, entry_id)
        if deleted:
            logger.info(f"日记删除成功: {entry_id}")
        else:
            logger.warning(f"日记不存在: {entry_id}")
        return deleted

    async def get_canvas(self, user: CurrentUser, mood_filter: str = "all") -> CanvasView:
        """
        画布回顾：所有日记以便利贴形式展示

        Args:
            user: 当前用户
            mood_filter: all / happy / sad
        """
        if mood_filter not in CANVAS_FILTERS:
            raise ValidationError(f"Unknown filter: {mood_filter}")
        entries = await self.get_entries(user)
        return layout_sticky_notes(entries, mood_filter)


# 创建全局日记服务实例
diary_service = DiaryService()
