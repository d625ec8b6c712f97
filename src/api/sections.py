"""
页面分区接口
左侧导航的四个分区互斥，每次只渲染一个分区的数据
"""

from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from src.api.deps import get_current_user, success
from src.models.profile import CurrentUser
from src.services.dashboard_service import dashboard_service
from src.services.diary_service import diary_service
from src.services.inspiration_service import inspiration_service
from src.services.profile_service import profile_service
from src.services.task_service import task_service
from src.utils.errors import ValidationError

router = APIRouter(prefix="/api/sections", tags=["sections"])

NAV_ITEMS = [
    {"id": "dashboard", "label": "Dashboard", "icon": "layout-dashboard"},
    {"id": "diary", "label": "Diary", "icon": "book"},
    {"id": "inspiration", "label": "Inspiration", "icon": "lightbulb"},
    {"id": "tasks", "label": "Daily Tasks", "icon": "check-square"},
]
SECTION_IDS = [item["id"] for item in NAV_ITEMS]
DEFAULT_SECTION = "dashboard"

# 分区内的子视图
SECTION_VIEWS = {
    "diary": ["input", "canvas"],
    "inspiration": ["capture", "library"],
}


def resolve_section(section: Optional[str]) -> str:
    """未知分区回退到首页"""
    return section if section in SECTION_IDS else DEFAULT_SECTION


async def render_section(section: str, user: CurrentUser,
                         view: Optional[str] = None,
                         now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    生成分区视图数据

    Args:
        section: 分区ID（已解析）
        user: 当前用户
        view: 分区内子视图，默认第一个；没有子视图的分区忽略该参数
        now: 客户端本地时间，决定问候语和"今天"

    Returns:
        分区视图数据
    """
    if section in SECTION_VIEWS:
        views = SECTION_VIEWS[section]
        view = view or views[0]
        if view not in views:
            raise ValidationError(f"Unknown view: {view}")
    else:
        view = None
    on = now.date() if now else None

    if section == "diary":
        if view == "canvas":
            content = await diary_service.get_canvas(user)
        else:
            content = diary_service.editor_defaults(on)
    elif section == "inspiration":
        if view == "library":
            content = await inspiration_service.get_bubble_map(user)
        else:
            content = inspiration_service.capture_defaults()
    elif section == "tasks":
        profile = await profile_service.get_profile(user)
        content = await task_service.get_board(user, profile.display_name, on)
    else:
        content = await dashboard_service.get_overview(user, now=now)

    return {"section": section, "view": view, "content": content}


@router.get("")
async def list_sections() -> Dict[str, Any]:
    """导航列表"""
    return success(data={"items": NAV_ITEMS, "default": DEFAULT_SECTION})


@router.get("/{section}")
async def get_section(section: str, view: Optional[str] = None,
                      now: Optional[datetime] = None,
                      user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    """渲染选中的分区"""
    return success(data=await render_section(resolve_section(section), user, view, now))
