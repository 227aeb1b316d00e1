"""
雕刻模块 - 布局/位图/QR编码/材质

子模块：
- qr_source: QR编码源（qrcode）
- font_fit: 字号适配与字形度量
- layout_engine: 归一化布局计算
- raster: 雕刻位图合成
- materials: 材质着色预设（渲染端使用）
"""

from .font_fit import FontFit, PillowTextMeasurer, fit_font_size, max_iterations
from .layout_engine import LayoutEngine, compute_layout
from .materials import MATERIAL_FINISHES, MaterialFinish, get_finish, scene_dimensions
from .qr_source import QRSource
from .raster import RasterCompositor

__all__ = [
    "QRSource",
    "FontFit",
    "PillowTextMeasurer",
    "fit_font_size",
    "max_iterations",
    "LayoutEngine",
    "compute_layout",
    "RasterCompositor",
    "MaterialFinish",
    "MATERIAL_FINISHES",
    "get_finish",
    "scene_dimensions",
]
