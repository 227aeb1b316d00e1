"""
流水线模块 - 预览调度与会话编排

子模块：
- scheduler: 防抖调度器（代次计数）
- preview: 预览再生成流水线
- session: 设计会话（配置/预览/导出）
"""

from .preview import PreviewPipeline
from .scheduler import DebouncedScheduler
from .session import DesignSession

__all__ = [
    "DebouncedScheduler",
    "PreviewPipeline",
    "DesignSession",
]
