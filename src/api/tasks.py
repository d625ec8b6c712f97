"""
每日任务接口
"""

from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from src.api.deps import get_current_user, success
from src.models.profile import CurrentUser
from src.models.task import TaskCreate, TaskUpdate
from src.services.profile_service import profile_service
from src.services.task_service import task_service
from src.utils.errors import NotFoundError

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("")
async def get_board(on: Optional[date] = None,
                    status: str = Query("all", alias="filter"),
                    user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    """
    每日任务视图

    Args:
        on: 日期，默认今天
        status: all / pending / completed
    """
    profile = await profile_service.get_profile(user)
    board = await task_service.get_board(user, profile.display_name, on, status)
    return success(data=board)


@router.post("")
async def create_task(payload: TaskCreate,
                      user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    task = await task_service.create_task(user, payload)
    return success("Task added", task)


@router.post("/{task_id}/toggle")
async def toggle_task(task_id: str,
                      user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    """切换完成状态"""
    task = await task_service.toggle_task(user, task_id)
    return success("Task completed" if task.completed else "Task reopened", task)


@router.patch("/{task_id}")
async def update_task(task_id: str, payload: TaskUpdate,
                      user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    task = await task_service.update_task(user, task_id, payload)
    return success("Task updated", task)


@router.delete("/{task_id}")
async def delete_task(task_id: str,
                      user: CurrentUser = Depends(get_current_user)) -> Dict[str, Any]:
    if not await task_service.delete_task(user, task_id):
        raise NotFoundError("Task not found")
    return success("Task deleted", {"id": task_id})
