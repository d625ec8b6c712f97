"""
日期时间工具
页面上展示的日期、问候语、时间标签都在这里统一格式化
"""

from datetime import date, datetime, time
from typing import Optional


def today() -> date:
    """获取本地当天日期"""
    return datetime.now().date()


def ordinal(day: int) -> str:
    """
    获取英文序数词

    Args:
        day: 月中的第几天

    Returns:
        例如 1st、2nd、11th、23rd
    """
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_long_date(value: date) -> str:
    """Monday, October 19th"""
    return f"{value.strftime('%A, %B')} {ordinal(value.day)}"


def format_day_header(value: date) -> str:
    """Monday, October 19"""
    return f"{value.strftime('%A, %B')} {value.day}"


def format_short_date(value: date) -> str:
    """Oct 12"""
    return f"{value.strftime('%b')} {value.day}"


def greeting_for(hour: int) -> str:
    """根据小时返回问候语"""
    if hour < 12:
        return "Good Morning"
    if hour < 18:
        return "Good Afternoon"
    return "Good Evening"


def relative_day_label(value: Optional[date], reference: date) -> str:
    """
    计算相对日期描述

    Args:
        value: 目标日期，None 表示没有记录
        reference: 参照日期（通常是今天）

    Returns:
        Today / Yesterday / N days ago / No entries yet
    """
    if value is None:
        return "No entries yet"
    delta = (reference - value).days
    if delta <= 0:
        return "Today"
    if delta == 1:
        return "Yesterday"
    return f"{delta} days ago"


def parse_time_of_day(value: Optional[str]) -> Optional[str]:
    """
    规范化时间字符串为 HH:MM

    Args:
        value: 8:05、08:05 或数据库返回的 08:05:00

    Returns:
        HH:MM，空值返回 None

    Raises:
        ValueError: 格式不合法
    """
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"invalid time of day: {value!r}")
    hour, minute = int(parts[0]), int(parts[1])
    return time(hour, minute).strftime("%H:%M")


def format_time_label(value: Optional[str]) -> Optional[str]:
    """08:00 -> 08:00 AM，13:30 -> 01:30 PM"""
    normalized = parse_time_of_day(value)
    if normalized is None:
        return None
    hour, minute = (int(p) for p in normalized.split(":"))
    suffix = "AM" if hour < 12 else "PM"
    return f"{(hour % 12) or 12:02d}:{minute:02d} {suffix}"
