"""
灵感数据模型
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


CATEGORIES = [
    {"id": "games", "label": "Games", "emoji": "🎮", "icon": "gamepad"},
    {"id": "cocktails", "label": "Cocktails", "emoji": "🍸", "icon": "wine"},
    {"id": "travel", "label": "Travel", "emoji": "✈️", "icon": "plane"},
    {"id": "books", "label": "Books", "emoji": "📚", "icon": "book"},
    {"id": "cooking", "label": "Cooking", "emoji": "👩‍🍳", "icon": "utensils"},
    {"id": "fitness", "label": "Fitness", "emoji": "💪", "icon": "dumbbell"},
    {"id": "art", "label": "Art", "emoji": "🎨", "icon": "palette"},
    {"id": "nature", "label": "Nature", "emoji": "🌿", "icon": "flower"},
    {"id": "language", "label": "Language", "emoji": "🌍", "icon": "globe"},
]

CATEGORY_IDS = [c["id"] for c in CATEGORIES]
INSPIRATION_FILTERS = ["all", "practiced", "unpracticed"]
CONTENT_MAX_LENGTH = 2000


class Inspiration(BaseModel):
    """灵感模型"""

    id: str
    user_id: str
    title: Optional[str] = None
    content: str
    category: Optional[str] = None
    is_practiced: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InspirationCreate(BaseModel):
    """创建灵感请求模型"""
    content: str = ""
    category: Optional[str] = None


class InspirationUpdate(BaseModel):
    """更新灵感请求模型"""
    content: Optional[str] = None
    category: Optional[str] = None
    is_practiced: Optional[bool] = None


class Bubble(BaseModel):
    """灵感地图上的气泡"""
    id: str
    title: str
    category: Optional[str] = None
    icon: str
    practiced: bool
    is_new: bool
    x: int
    y: int
    size: int


class Connection(BaseModel):
    """同类灵感之间的连线"""
    source: str
    target: str
    x1: int
    y1: int
    x2: int
    y2: int


class BubbleMap(BaseModel):
    """灵感地图视图"""
    filter: str
    total: int
    bubbles: List[Bubble] = Field(default_factory=list)
    connections: List[Connection] = Field(default_factory=list)
