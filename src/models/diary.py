"""
日记数据模型
定义日记相关的数据结构
"""

from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, Field


WEATHER_OPTIONS = [
    {"id": "sunny", "label": "Sunny", "icon": "sun"},
    {"id": "cloudy", "label": "Cloudy", "icon": "cloud"},
    {"id": "rainy", "label": "Rainy", "icon": "cloud-rain"},
]

MOOD_OPTIONS = [
    {"id": "happy", "label": "Happy", "icon": "smile"},
    {"id": "neutral", "label": "Neutral", "icon": "meh"},
    {"id": "sad", "label": "Sad", "icon": "frown"},
    {"id": "loved", "label": "Loved", "icon": "heart"},
]

WEATHER_IDS = [o["id"] for o in WEATHER_OPTIONS]
MOOD_IDS = [o["id"] for o in MOOD_OPTIONS]

DEFAULT_WEATHER = "sunny"
DEFAULT_MOOD = "happy"
TITLE_MAX_LENGTH = 100


class DiaryEntry(BaseModel):
    """日记模型"""

    id: str
    user_id: str
    entry_date: date
    title: Optional[str] = None
    content: str
    mood: Optional[str] = None
    weather: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DiaryEntryCreate(BaseModel):
    """创建日记请求模型"""
    title: Optional[str] = None
    content: str = ""
    mood: Optional[str] = DEFAULT_MOOD
    weather: Optional[str] = DEFAULT_WEATHER
    entry_date: Optional[date] = None


class DiaryEntryUpdate(BaseModel):
    """更新日记请求模型"""
    title: Optional[str] = None
    content: Optional[str] = None
    mood: Optional[str] = None
    weather: Optional[str] = None


class StickyNote(BaseModel):
    """画布上的便利贴"""
    id: str
    date: str
    title: str
    content: str
    mood: Optional[str] = None
    tone: str
    icon: str
    top: int
    left: int
    rotation: int


class CanvasView(BaseModel):
    """画布回顾视图"""
    filter: str
    total: int
    notes: List[StickyNote] = Field(default_factory=list)
