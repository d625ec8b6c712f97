"""
首页概览服务
汇总今天的问候、心情、最近日记、任务进度和灵感
"""

from datetime import datetime
from typing import Any, Dict, Optional

from src.models.profile import CurrentUser
from src.services.diary_service import DiaryService, diary_service
from src.services.inspiration_service import InspirationService, inspiration_service
from src.services.profile_service import ProfileService, profile_service
from src.services.task_service import (
    TaskService, compute_progress, task_service, to_item
)
from src.utils.dates import format_long_date, greeting_for, relative_day_label
from src.utils.errors import ValidationError

DASHBOARD_MOODS = [
    {"id": "happy", "label": "Happy", "icon": "sun"},
    {"id": "calm", "label": "Calm", "icon": "cloud"},
    {"id": "melancholy", "label": "Melancholy", "icon": "cloud-rain"},
    {"id": "inspired", "label": "Inspired", "icon": "sparkles"},
]
DEFAULT_DASHBOARD_MOOD = "inspired"
TASK_PREVIEW_COUNT = 3
INSPIRATION_PREVIEW_COUNT = 3


class DashboardService:
    """首页概览服务"""

    def __init__(self, diaries: Optional[DiaryService] = None,
                 tasks: Optional[TaskService] = None,
                 inspirations: Optional[InspirationService] = None,
                 profiles: Optional[ProfileService] = None):
        self.diaries = diaries or diary_service
        self.tasks = tasks or task_service
        self.inspirations = inspirations or inspiration_service
        self.profiles = profiles or profile_service

    async def get_overview(self, user: CurrentUser, mood: Optional[str] = None,
                           now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        生成首页概览

        Args:
            user: 当前用户
            mood: 当前选中的心情
            now: 客户端本地时间，默认服务器本地时间

        Returns:
            首页视图数据
        """
        now = now or datetime.now()
        mood = mood or DEFAULT_DASHBOARD_MOOD
        if mood not in [m["id"] for m in DASHBOARD_MOODS]:
            raise ValidationError(f"Unknown mood: {mood}")

        profile = await self.profiles.get_profile(user)
        latest = await self.diaries.get_latest_entry(user)
        tasks = await self.tasks.get_tasks(user, now.date())
        recent = await self.inspirations.get_inspirations(
            user, limit=INSPIRATION_PREVIEW_COUNT
        )

        return {
            "date_label": format_long_date(now.date()),
            "greeting": f"{greeting_for(now.hour)}, {profile.display_name}",
            "display_name": profile.display_name,
            "moods": [
                {**m, "selected": m["id"] == mood} for m in DASHBOARD_MOODS
            ],
            "selected_mood": mood,
            "diary": {
                "last_entry_label": relative_day_label(
                    latest.entry_date if latest else None, now.date()
                ),
                "last_entry": latest.model_dump(mode="json") if latest else None,
            },
            "tasks": {
                "items": [
                    to_item(t).model_dump(mode="json")
                    for t in tasks[:TASK_PREVIEW_COUNT]
                ],
                "progress": compute_progress(tasks).model_dump(),
            },
            "inspirations": [i.model_dump(mode="json") for i in recent],
        }


# 创建全局首页服务实例
dashboard_service = DashboardService()
