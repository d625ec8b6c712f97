"""
灵感接口
记录灵感、灵感列表、灵感地图
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from src.api.deps import get_current_user, success
from src.models.inspiration import InspirationCreate, InspirationUpdate
from src.models.profile import CurrentUser
from src.services.inspiration_service import inspiration_service
from src.utils.errors import NotFoundError

router = APIRouter(prefix="/api/inspirations", tags=["inspiration"])


@router.get("/capture")
async def get_capture_form() -> Dict[str, Any]:
    """记录灵感页面初始状态"""
    return success(data=inspiration_service.capture_defaults())


@router.post("")
async def create_inspiration(payload: InspirationCreate,
                             user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    inspiration = await inspiration_service.create_inspiration(user, payload)
    return success("Inspiration saved! Your spark has been added to the map.", inspiration)


@router.get("")
async def list_inspirations(practiced_filter: str = Query("all", alias="filter"),
                            user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    items = await inspiration_service.get_inspirations(user, practiced_filter)
    return success(data=items)


@router.get("/map")
async def get_bubble_map(practiced_filter: str = Query("all", alias="filter"),
                         user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    """灵感气泡地图"""
    return success(data=await inspiration_service.get_bubble_map(user, practiced_filter))


@router.post("/{inspiration_id}/toggle")
async def toggle_practiced(inspiration_id: str,
                           user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    inspiration = await inspiration_service.toggle_practiced(user, inspiration_id)
    msg = "Marked as practiced" if inspiration.is_practiced else "Marked as not practiced"
    return success(msg, inspiration)


@router.patch("/{inspiration_id}")
async def update_inspiration(inspiration_id: str, payload: InspirationUpdate,
                             user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    inspiration = await inspiration_service.update_inspiration(user, inspiration_id, payload)
    return success("Inspiration updated", inspiration)


@router.delete("/{inspiration_id}")
async def delete_inspiration(inspiration_id: str,
                             user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    if not await inspiration_service.delete_inspiration(user, inspiration_id):
        raise NotFoundError("Inspiration not found")
    return success("Inspiration deleted", {"id": inspiration_id})
