"""
预览产物 - 雕刻位图与一次预览再生成的结果

RasterMap 生成后归预览渲染端独占，导出端不持有其引用
"""

from __future__ import annotations

from io import BytesIO

from PIL import Image
from pydantic import BaseModel, Field

from .design import DesignConfig
from .layout import LayoutPlan
from .qr import QRMatrix

SURFACE = 255   # 表面：高反射/无位移
ENGRAVED = 0    # 雕刻：低反射/有位移


class RasterMap(BaseModel):
    """雕刻位图（L 模式正方形灰度图）"""
    image: Image.Image
    resolution: int
    dark_cells: int = Field(0, description="已填充的二维码模块数")
    border_drawn: bool = False

    model_config = {"arbitrary_types_allowed": True}

    def to_png_bytes(self) -> bytes:
        buf = BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()


class PreviewResult(BaseModel):
    """一次预览再生成的完整结果"""
    generation: int
    config: DesignConfig
    matrix: QRMatrix
    plan: LayoutPlan
    raster: RasterMap

    model_config = {"arbitrary_types_allowed": True}
