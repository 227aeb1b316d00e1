"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- DesignConfig: 铭牌设计配置（不可变）
- QRMatrix: 二维码模块矩阵
- LayoutPlan: 归一化布局计划
- RasterMap / PreviewResult: 预览产物
"""

from .design import DesignConfig, MaterialType
from .layout import LayoutPlan, QRBox
from .preview import ENGRAVED, SURFACE, PreviewResult, RasterMap
from .qr import QRMatrix

__all__ = [
    "DesignConfig",
    "MaterialType",
    "QRMatrix",
    "LayoutPlan",
    "QRBox",
    "RasterMap",
    "PreviewResult",
    "SURFACE",
    "ENGRAVED",
]
