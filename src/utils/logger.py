"""
日志管理模块
配置和管理应用的日志记录
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from .config import settings


def resolve_level(level_name: str) -> Optional[int]:
    """日志级别名称转换为数值，无法识别时返回 None"""
    level = logging.getLevelName((level_name or "").strip().upper())
    return level if isinstance(level, int) else None


def setup_logger(name: str = "fayes_diary") -> logging.Logger:
    """
    设置日志记录器

    Args:
        name: 日志记录器名称

    Returns:
        配置好的日志记录器
    """
    log_dir = Path(settings.log_file).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    level = resolve_level(settings.log_level)
    logger = logging.getLogger(name)
    effective = logging.INFO if level is None else level
    logger.setLevel(effective)

    # 清除已有的处理器，避免重复输出
    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(effective)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    file_handler.setLevel(effective)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if level is None:
        logger.warning(f"未知日志级别 {settings.log_level!r}，使用 INFO")

    return logger


# 创建全局日志记录器
logger = setup_logger()
