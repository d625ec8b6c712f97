"""
日记接口
写日记、查询、编辑、删除以及画布回顾
"""

from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from src.api.deps import get_current_user, success
from src.models.diary import DiaryEntryCreate, DiaryEntryUpdate
from src.models.profile import CurrentUser
from src.services.diary_service import diary_service
from src.utils.errors import NotFoundError

router = APIRouter(prefix="/api/diary", tags=["diary"])


@router.get("/editor")
async def get_editor(on: Optional[date] = None) -> Dict[str, Any]:
    """写日记页面初始状态，on 为客户端本地日期"""
    return success(data=diary_service.editor_defaults(on))


@router.post("/entries")
async def create_entry(payload: DiaryEntryCreate,
                       user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    """保存今天的日记"""
    entry = await diary_service.create_entry(user, payload)
    return success("Diary entry saved!", entry)


@router.get("/entries")
async def list_entries(on: Optional[date] = None,
                       user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    """
    查询日记

    传入 on 时只返回该日期的日记，否则返回全部
    """
    if on is not None:
        entries = await diary_service.get_entries_by_date(user, on)
    else:
        entries = await diary_service.get_entries(user)
    return success(data=entries)


@router.patch("/entries/{entry_id}")
async def update_entry(entry_id: str, payload: DiaryEntryUpdate,
                       user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    entry = await diary_service.update_entry(user, entry_id, payload)
    return success("Diary entry updated", entry)


@router.delete("/entries/{entry_id}")
async def delete_entry(entry_id: str,
                       user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    if not await diary_service.delete_entry(user, entry_id):
        raise NotFoundError("Entry not found")
    return success("Diary entry deleted", {"id": entry_id})


@router.get("/canvas")
async def get_canvas(mood_filter: str = Query("all", alias="filter"),
                     user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    """画布回顾"""
    return success(data=await diary_service.get_canvas(user, mood_filter))
