"""
日志初始化 - 按运行期配置设置级别与文件输出
"""

from __future__ import annotations

import logging

from .config import LoggingConfig, get_config

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(config: LoggingConfig | None = None, verbose: bool = False) -> None:
    cfg = config or get_config().logging
    level = logging.DEBUG if verbose else getattr(logging, cfg.log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if cfg.log_to_file:
        handlers.append(logging.FileHandler(cfg.log_file, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
