"""
任务服务
管理每日任务的查询、新增、完成状态切换、编辑和删除
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from src.backend.client import SupabaseClient, backend_client, parse_record
from src.models.profile import CurrentUser
from src.models.task import (
    NOTE_MAX_LENGTH, TASK_FILTERS, TITLE_MAX_LENGTH, Task, TaskBoard,
    TaskCreate, TaskItem, TaskProgress, TaskUpdate
)
from src.utils.dates import (
    format_day_header, format_time_label, parse_time_of_day, today
)
from src.utils.errors import NotFoundError, ValidationError
from src.utils.logger import logger

TABLE = "tasks"


def sort_tasks(tasks: List[Task]) -> List[Task]:
    """按计划时间排序，未设置时间的排在最后，再按创建时间"""
    def key(task: Task):
        created = task.created_at.timestamp() if task.created_at else 0.0
        return (task.scheduled_time is None, task.scheduled_time or "", created)
    return sorted(tasks, key=key)


def filter_tasks(tasks: List[Task], status: str) -> List[Task]:
    """按状态筛选：all / pending / completed"""
    if status == "pending":
        return [t for t in tasks if not t.completed]
    if status == "completed":
        return [t for t in tasks if t.completed]
    return list(tasks)


def compute_progress(tasks: List[Task]) -> TaskProgress:
    """计算完成进度"""
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)
    percent = round(completed / total * 100, 1) if total else 0.0
    return TaskProgress(completed=completed, total=total, percent=percent)


def to_item(task: Task) -> TaskItem:
    return TaskItem(
        id=task.id,
        title=task.title,
        time_label=format_time_label(task.scheduled_time),
        completed=task.completed,
        note=task.note,
        category=task.category,
    )


class TaskService:
    """任务服务"""

    def __init__(self, client: Optional[SupabaseClient] = None):
        """初始化任务服务"""
        self.client = client or backend_client

    def _to_task(self, row: Dict[str, Any]) -> Task:
        task = parse_record(Task, row)
        # 数据库 time 类型返回 HH:MM:SS
        task.scheduled_time = parse_time_of_day(task.scheduled_time)
        return task

    def _clean_title(self, title: str) -> str:
        cleaned = (title or "").strip()
        if not cleaned:
            raise ValidationError("Please enter a task title")
        if len(cleaned) > TITLE_MAX_LENGTH:
            raise ValidationError(f"Task title must be at most {TITLE_MAX_LENGTH} characters")
        return cleaned

    def _clean_note(self, note: Optional[str]) -> Optional[str]:
        cleaned = (note or "").strip()
        if len(cleaned) > NOTE_MAX_LENGTH:
            raise ValidationError(f"Note must be at most {NOTE_MAX_LENGTH} characters")
        return cleaned or None

    def _clean_time(self, value: Optional[str]) -> Optional[str]:
        try:
            return parse_time_of_day(value)
        except ValueError:
            raise ValidationError("Time must look like HH:MM")

    async def get_tasks(self, user: CurrentUser, on: Optional[date] = None) -> List[Task]:
        """
        获取某天的任务

        Args:
            user: 当前用户
            on: 日期，默认今天

        Returns:
            排好序的任务列表
        """
        rows = await self.client.select(
            TABLE, user.token,
            filters={"user_id": user.id, "task_date": on or today()},
        )
        return sort_tasks([self._to_task(r) for r in rows])

    async def get_board(self, user: CurrentUser, display_name: str,
                        on: Optional[date] = None, status: str = "all") -> TaskBoard:
        """
        每日任务视图

        Args:
            user: 当前用户
            display_name: 显示名称
            on: 日期
            status: 筛选条件

        Returns:
            包含问候语、进度和任务列表的视图
        """
        if status not in TASK_FILTERS:
            raise ValidationError(f"Unknown filter: {status}")
        on = on or today()
        tasks = await self.get_tasks(user, on)
        return TaskBoard(
            task_date=on,
            greeting=f"Hello, {display_name}.",
            subtitle=f"{format_day_header(on)} - Here is your flow for today.",
            filter=status,
            progress=compute_progress(tasks),
            tasks=[to_item(t) for t in filter_tasks(tasks, status)],
        )

    async def create_task(self, user: CurrentUser, payload: TaskCreate) -> Task:
        """
        新增任务

        Raises:
            ValidationError: 标题为空、过长或时间格式不合法
        """
        row = await self.client.insert(TABLE, user.token, {
            "user_id": user.id,
            "task_date": (payload.task_date or today()).isoformat(),
            "title": self._clean_title(payload.title),
            "scheduled_time": self._clean_time(payload.scheduled_time),
            "note": self._clean_note(payload.note),
            "category": (payload.category or "").strip() or None,
            "completed": False,
        })
        task = self._to_task(row)
        logger.info(f"任务创建成功: {task.id}")
        return task

    async def set_completed(self, user: CurrentUser, task_id: str, completed: bool) -> Task:
        """设置完成状态，同时记录/清除完成时间"""
        completed_at = datetime.now(timezone.utc).isoformat() if completed else None
        row = await self.client.update(TABLE, user.token, task_id, {
            "completed": completed,
            "completed_at": completed_at,
        })
        logger.info(f"任务状态更新: {task_id} -> {'完成' if completed else '未完成'}")
        return self._to_task(row)

    async def toggle_task(self, user: CurrentUser, task_id: str) -> Task:
        """
        切换任务完成状态

        Args:
            user: 当前用户
            task_id: 任务ID

        Returns:
            更新后的任务
        """
        current = await self.client.select_one(
            TABLE, user.token, filters={"id": task_id, "user_id": user.id}
        )
        if current is None:
            raise NotFoundError("Task not found")
        return await self.set_completed(user, task_id, not current.get("completed", False))

    async def update_task(self, user: CurrentUser, task_id: str, payload: TaskUpdate) -> Task:
        """编辑任务标题、时间、备注、分类或完成状态"""
        values: Dict[str, Any] = {}
        if payload.title is not None:
            values["title"] = self._clean_title(payload.title)
        if payload.scheduled_time is not None:
            values["scheduled_time"] = self._clean_time(payload.scheduled_time)
        if payload.note is not None:
            values["note"] = self._clean_note(payload.note)
        if payload.category is not None:
            values["category"] = payload.category.strip() or None
        if payload.completed is not None:
            values["completed"] = payload.completed
            values["completed_at"] = (
                datetime.now(timezone.utc).isoformat() if payload.completed else None
            )
        if not values:
            raise ValidationError("Nothing to update")

        row = await self.client.update(TABLE, user.token, task_id, values)
        logger.info(f"任务更新成功: {task_id}")
        return self._to_task(row)

    async def delete_task(self, user: CurrentUser, task_id: str) -> bool:
        """删除任务"""
        deleted = await self.client.delete(TABLE, user.token, task_id)
        if deleted:
            logger.info(f"任务删除成功: {task_id}")
        else:
            logger.warning(f"任务不存在: {task_id}")
        return deleted


# 创建全局任务服务实例
task_service = TaskService()
