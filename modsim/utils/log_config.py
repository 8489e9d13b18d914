"""
日志配置
基于标准库logging的统一日志设置
"""

import logging

from pydantic import BaseModel, Field


DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class LogConfig(BaseModel):
    """
    日志配置

    Attributes:
        level: 日志级别（DEBUG/INFO/WARNING/ERROR）
        format: 日志格式
    """
    level: str = Field(default="INFO", description="日志级别")
    format: str = Field(default=DEFAULT_FORMAT, description="日志格式")


def setup_logging(config: LogConfig = None) -> logging.Logger:
    """
    配置modsim包的根日志记录器

    Args:
        config: 日志配置，None使用默认配置

    Returns:
        modsim根日志记录器
    """
    config = config or LogConfig()
    logger = logging.getLogger("modsim")
    logger.setLevel(config.level.upper())

    if not any(getattr(h, "_modsim_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler._modsim_handler = True
        logger.addHandler(handler)

    for handler in logger.handlers:
        if getattr(handler, "_modsim_handler", False):
            handler.setFormatter(logging.Formatter(config.format))

    return logger
