"""
日志模块。

nodeman 只使用一个名为 nodeman 的日志记录器，默认仅输出到标准错误流。
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "nodeman"
LOG_DIR = Path.home() / ".ldesign" / "logs"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(module)s - %(message)s"

_logger: Optional[logging.Logger] = None


def setup_logger(verbose: bool = False, log_file: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """
    配置 nodeman 日志记录器，重复调用会替换已有的处理器。

    参数:
        verbose: 是否输出 DEBUG 级别日志
        log_file: 是否同时写入 nodeman.log（5MB 轮转，保留 5 个备份）
        log_dir: 日志文件目录，默认为 ~/.ldesign/logs

    返回:
        配置好的 Logger 实例
    """
    global _logger

    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler()]
    if log_file:
        target_dir = log_dir or LOG_DIR
        target_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            target_dir / "nodeman.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        ))

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """获取日志记录器实例，尚未配置时使用默认配置。"""
    if _logger is None:
        return setup_logger()
    return _logger
