"""
模块接口契约 - 定义各模块的抽象接口

设计原则：
1. 模块间通过接口通信，不直接依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换

使用方式：
    from plaque.interfaces import IQRSource

    class FixedQRSource(IQRSource):
        def encode(self, url: str, ec_level: str | None = None) -> QRMatrix:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import DesignConfig, LayoutPlan, QRMatrix, RasterMap


# ============================================================================
# 外部协作方接口
# ============================================================================

class IQRSource(ABC):
    """QR 编码源接口 - 相同输入必须得到相同矩阵"""

    @abstractmethod
    def encode(self, url: str, ec_level: str | None = None) -> QRMatrix:
        """
        将URL编码为模块矩阵

        Args:
            url: 目标URL（为空时由实现替换为占位URL）
            ec_level: 纠错等级 L/M/Q/H

        Returns:
            方阵形式的 QRMatrix
        """
        ...


class TextMeasurer(Protocol):
    """字形度量协议：给定文字与字号返回渲染宽度"""

    def __call__(self, text: str, font_size: int) -> float:
        ...


# ============================================================================
# 雕刻核心接口
# ============================================================================

class ILayoutEngine(ABC):
    """布局引擎接口 - 纯函数，无I/O"""

    @abstractmethod
    def compute(self, config: DesignConfig, module_count: int) -> LayoutPlan:
        """
        计算归一化空间布局

        Args:
            config: 设计配置
            module_count: QR矩阵边长

        Returns:
            布局计划
        """
        ...


class IRasterCompositor(ABC):
    """位图合成器接口"""

    @abstractmethod
    def compose(self, plan: LayoutPlan, matrix: QRMatrix) -> RasterMap:
        """
        按布局计划绘制雕刻位图

        Args:
            plan: 布局计划
            matrix: QR模块矩阵

        Returns:
            R×R 雕刻位图

        Raises:
            RasterError: 绘图上下文不可用
        """
        ...


# ============================================================================
# 导出接口
# ============================================================================

class IVectorExporter(ABC):
    """矢量导出器接口 - DXF 文本"""

    @abstractmethod
    def export(self, config: DesignConfig, matrix: QRMatrix) -> str:
        """
        生成完整的DXF文档字符串（毫米空间，左下原点，Y向上）

        Raises:
            ExportError: 导出内部失败
        """
        ...


class IProofRenderer(ABC):
    """打样PDF渲染器接口"""

    @abstractmethod
    def render(self, raster: RasterMap, width_mm: float, height_mm: float) -> bytes:
        """生成嵌入雕刻位图的打样PDF"""
        ...

    @abstractmethod
    def write(self, raster: RasterMap, width_mm: float, height_mm: float, pdf_path: Path) -> Path:
        """生成并写入打样PDF"""
        ...


# ============================================================================
# 异常定义
# ============================================================================

class PlaqueError(Exception):
    """基础异常"""
    pass


class EncodingError(PlaqueError):
    """QR编码错误"""
    pass


class RasterError(PlaqueError):
    """位图生成错误"""
    pass


class ExportError(PlaqueError):
    """导出错误"""
    pass


class StaleExportError(ExportError):
    """导出时当前配置与显示中的预览不一致"""
    pass
