"""
画布布局服务
为日记便利贴和灵感气泡生成伪随机但稳定的位置
同一条记录每次刷新都落在同一个位置（以记录ID作为随机种子）
"""

import math
import random
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from src.models.diary import CanvasView, DiaryEntry, StickyNote
from src.models.inspiration import (
    CATEGORIES, Bubble, BubbleMap, Connection, Inspiration
)
from src.utils.dates import format_short_date

# 便利贴网格
NOTE_COLUMNS = 3
NOTE_COLUMN_WIDTH = 300
NOTE_ROW_HEIGHT = 190
NOTE_ORIGIN_TOP = 110
NOTE_ORIGIN_LEFT = 70
NOTE_JITTER_X = 40
NOTE_JITTER_Y = 30
NOTE_MAX_ROTATION = 3

# 气泡地图
MAP_WIDTH = 640
MAP_HEIGHT = 560
MAP_MARGIN = 40
BUBBLE_MIN_SIZE = 70
BUBBLE_MAX_SIZE = 100
BUBBLE_GAP = 12
BUBBLE_SIZE_CONTENT_CAP = 200
MAX_PLACEMENT_ATTEMPTS = 30
NEW_BADGE_WINDOW = timedelta(hours=24)

CANVAS_FILTERS = ["all", "happy", "sad"]

_MOOD_TONES = {"happy": "happy", "loved": "happy", "sad": "sad"}
_MOOD_ICONS = {"happy": "smile", "loved": "heart", "sad": "frown", "neutral": "meh"}
_WEATHER_ICONS = {"sunny": "sun", "cloudy": "cloud", "rainy": "cloud"}
_CATEGORY_ICONS = {c["id"]: c["icon"] for c in CATEGORIES}


def mood_tone(mood: Optional[str]) -> str:
    """心情归类：happy / sad / neutral"""
    return _MOOD_TONES.get(mood or "", "neutral")


def note_icon(mood: Optional[str], weather: Optional[str]) -> str:
    """便利贴图标，优先按心情，其次按天气"""
    if mood in _MOOD_ICONS:
        return _MOOD_ICONS[mood]
    return _WEATHER_ICONS.get(weather or "", "smile")


def _note_position(entry_id: str, index: int) -> Tuple[int, int, int]:
    rng = random.Random(entry_id)
    row, column = divmod(index, NOTE_COLUMNS)
    top = NOTE_ORIGIN_TOP + row * NOTE_ROW_HEIGHT + rng.randint(-NOTE_JITTER_Y, NOTE_JITTER_Y)
    left = NOTE_ORIGIN_LEFT + column * NOTE_COLUMN_WIDTH + rng.randint(-NOTE_JITTER_X, NOTE_JITTER_X)
    rotation = rng.randint(-NOTE_MAX_ROTATION, NOTE_MAX_ROTATION)
    return max(top, 0), max(left, 0), rotation


def layout_sticky_notes(entries: Iterable[DiaryEntry], mood_filter: str = "all") -> CanvasView:
    """
    生成日记画布

    Args:
        entries: 日记列表
        mood_filter: all / happy / sad

    Returns:
        画布视图；位置按全部日记计算，筛选不会让便利贴移动
    """
    ordered = sorted(
        entries,
        key=lambda e: (e.entry_date, _sortable(e.created_at), e.id)
    )
    notes = []
    for index, entry in enumerate(ordered):
        tone = mood_tone(entry.mood)
        if mood_filter != "all" and tone != mood_filter:
            continue
        top, left, rotation = _note_position(entry.id, index)
        notes.append(StickyNote(
            id=entry.id,
            date=format_short_date(entry.entry_date),
            title=entry.title or format_short_date(entry.entry_date),
            content=entry.content,
            mood=entry.mood,
            tone=tone,
            icon=note_icon(entry.mood, entry.weather),
            top=top,
            left=left,
            rotation=rotation,
        ))
    return CanvasView(filter=mood_filter, total=len(ordered), notes=notes)


def bubble_size(content: str) -> int:
    """内容越长气泡越大"""
    length = min(len(content or ""), BUBBLE_SIZE_CONTENT_CAP)
    return BUBBLE_MIN_SIZE + length * (BUBBLE_MAX_SIZE - BUBBLE_MIN_SIZE) // BUBBLE_SIZE_CONTENT_CAP


def _overlaps(x: int, y: int, size: int, placed: List[Tuple[int, int, int]]) -> bool:
    cx, cy = x + size / 2, y + size / 2
    for px, py, psize in placed:
        distance = math.hypot(cx - (px + psize / 2), cy - (py + psize / 2))
        if distance < (size + psize) / 2 + BUBBLE_GAP:
            return True
    return False


def _place_bubble(seed: str, size: int, placed: List[Tuple[int, int, int]]) -> Tuple[int, int]:
    rng = random.Random(seed)
    x = y = MAP_MARGIN
    for _ in range(MAX_PLACEMENT_ATTEMPTS):
        x = rng.randint(MAP_MARGIN, MAP_WIDTH - MAP_MARGIN - size)
        y = rng.randint(MAP_MARGIN, MAP_HEIGHT - MAP_MARGIN - size)
        if not _overlaps(x, y, size, placed):
            break
    return x, y


def _is_new(created_at: Optional[datetime], now: datetime) -> bool:
    if created_at is None:
        return False
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return now - created_at < NEW_BADGE_WINDOW


def _sortable(value: Optional[datetime]) -> datetime:
    if value is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def layout_bubbles(inspirations: Iterable[Inspiration], practiced_filter: str = "all",
                   now: Optional[datetime] = None) -> BubbleMap:
    """
    生成灵感气泡地图

    Args:
        inspirations: 灵感列表
        practiced_filter: all / practiced / unpracticed
        now: 当前时间（用于判断 NEW 标记）

    Returns:
        气泡地图；同一分类的可见气泡按创建顺序用虚线串联
    """
    now = now or datetime.now(timezone.utc)
    ordered = sorted(inspirations, key=lambda i: (_sortable(i.created_at), i.id))

    placed: List[Tuple[int, int, int]] = []
    bubbles: List[Bubble] = []
    for inspiration in ordered:
        size = bubble_size(inspiration.content)
        x, y = _place_bubble(inspiration.id, size, placed)
        placed.append((x, y, size))

        if practiced_filter == "practiced" and not inspiration.is_practiced:
            continue
        if practiced_filter == "unpracticed" and inspiration.is_practiced:
            continue
        bubbles.append(Bubble(
            id=inspiration.id,
            title=inspiration.title or inspiration.content[:20],
            category=inspiration.category,
            icon=_CATEGORY_ICONS.get(inspiration.category or "", "sparkles"),
            practiced=inspiration.is_practiced,
            is_new=_is_new(inspiration.created_at, now),
            x=x,
            y=y,
            size=size,
        ))

    return BubbleMap(
        filter=practiced_filter,
        total=len(ordered),
        bubbles=bubbles,
        connections=connect_bubbles(bubbles),
    )


def connect_bubbles(bubbles: List[Bubble]) -> List[Connection]:
    """同一分类内相邻的气泡连线（圆心到圆心）"""
    last_by_category: Dict[str, Bubble] = {}
    connections = []
    for bubble in bubbles:
        if not bubble.category:
            continue
        previous = last_by_category.get(bubble.category)
        if previous is not None:
            connections.append(Connection(
                source=previous.id,
                target=bubble.id,
                x1=previous.x + previous.size // 2,
                y1=previous.y + previous.size // 2,
                x2=bubble.x + bubble.size // 2,
                y2=bubble.y + bubble.size // 2,
            ))
        last_by_category[bubble.category] = bubble
    return connections
