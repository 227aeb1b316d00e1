"""
下载文件命名 - 由物理宽高确定性生成
"""

from __future__ import annotations

from ..models import DesignConfig
from .dxf_writer import format_number


def dxf_filename(config: DesignConfig) -> str:
    """plaque-{宽}x{高}.dxf"""
    return f"plaque-{format_number(config.width)}x{format_number(config.height)}.dxf"


def raster_filename(config: DesignConfig) -> str:
    """plaque-{宽}x{高}.png"""
    return f"plaque-{format_number(config.width)}x{format_number(config.height)}.png"
