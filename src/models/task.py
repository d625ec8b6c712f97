"""
任务数据模型
"""

from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, Field


TITLE_MAX_LENGTH = 200
NOTE_MAX_LENGTH = 1000
TASK_FILTERS = ["all", "pending", "completed"]


class Task(BaseModel):
    """任务模型"""

    id: str
    user_id: str
    task_date: date
    title: str
    scheduled_time: Optional[str] = None
    completed: bool = False
    completed_at: Optional[datetime] = None
    note: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TaskCreate(BaseModel):
    """创建任务请求模型"""
    title: str = ""
    task_date: Optional[date] = None
    scheduled_time: Optional[str] = None
    note: Optional[str] = None
    category: Optional[str] = None


class TaskUpdate(BaseModel):
    """更新任务请求模型"""
    title: Optional[str] = None
    scheduled_time: Optional[str] = None
    note: Optional[str] = None
    category: Optional[str] = None
    completed: Optional[bool] = None


class TaskItem(BaseModel):
    """任务列表展示项"""
    id: str
    title: str
    time_label: Optional[str] = None
    completed: bool
    note: Optional[str] = None
    category: Optional[str] = None


class TaskProgress(BaseModel):
    """任务完成进度"""
    completed: int
    total: int
    percent: float


class TaskBoard(BaseModel):
    """每日任务视图"""
    task_date: date
    greeting: str
    subtitle: str
    filter: str
    progress: TaskProgress
    tasks: List[TaskItem] = Field(default_factory=list)
