"""
首页概览与用户资料接口
"""

from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from src.api.deps import get_current_user, success
from src.models.profile import CurrentUser
from src.services.dashboard_service import dashboard_service
from src.services.profile_service import profile_service

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard")
async def get_dashboard(mood: Optional[str] = None,
                        now: Optional[datetime] = None,
                        user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    """
    首页概览

    now 为客户端本地时间（ISO 8601，带时区），问候语和日期按它计算
    """
    return success(data=await dashboard_service.get_overview(user, mood, now))


@router.get("/profile")
async def get_profile(user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    """当前用户资料"""
    return success(data=await profile_service.get_profile(user))
