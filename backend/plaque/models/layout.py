"""
布局计划 - 归一化正方形空间中的摆放几何

每次配置变更都重新计算，不持久化
"""

from __future__ import annotations

from pydantic import BaseModel


class QRBox(BaseModel):
    """二维码包围盒（归一化空间）"""
    x: float
    y: float
    size: float
    module_count: int

    model_config = {"frozen": True}

    @property
    def cell_size(self) -> float:
        if self.module_count <= 0:
            return 0.0
        return self.size / self.module_count

    def cell_rect(self, row: int, col: int) -> tuple[float, float, float, float]:
        """单个模块的 (x0, y0, x1, y1)，y 向下"""
        cell = self.cell_size
        x0 = self.x + col * cell
        y0 = self.y + row * cell
        return x0, y0, x0 + cell, y0 + cell


class LayoutPlan(BaseModel):
    """布局计划"""
    resolution: int
    border_enabled: bool
    border_stroke: int
    text: str
    text_anchor: tuple[float, float]
    font_size: int
    text_width: float = 0.0
    qr_box: QRBox
    corner_radius: float = 0.0  # 钳制后的物理圆角(mm)，供3D预览使用

    model_config = {"frozen": True}

    @property
    def border_inset(self) -> float:
        """描边中心线距边缘的距离（描边宽度一半）"""
        return self.border_stroke / 2 if self.border_enabled else 0.0

    @property
    def has_text(self) -> bool:
        return bool(self.text.strip())
