"""
打样PDF - 将雕刻位图按物理宽高比嵌入A4页面

职责：
1. 横/竖版按宽高自动选择
2. 标题与尺寸说明
3. 图像按比例缩放到页边距内并水平居中

依赖：
- fpdf2: PDF生成

测试要点：
- test_image_box_portrait: 竖版缩放
- test_image_box_tall: 高图按可用高度缩放
- test_render_pdf_bytes: 输出为PDF
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from fpdf import FPDF

from ..config import ProofConfig, get_config
from ..interfaces import ExportError, IProofRenderer
from ..models import RasterMap
from .dxf_writer import format_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageBox:
    """页面上的图像位置(mm)"""
    x: float
    y: float
    w: float
    h: float


def fit_image_box(
    page_w: float,
    page_h: float,
    width_mm: float,
    height_mm: float,
    settings: ProofConfig,
) -> ImageBox:
    """先按可用宽度缩放，超出可用高度时改按高度缩放"""
    available_w = page_w - settings.margin_mm * 2
    available_h = page_h - settings.header_mm
    ratio = width_mm / height_mm

    final_w = available_w
    final_h = available_w / ratio
    if final_h > available_h:
        final_h = available_h
        final_w = available_h * ratio

    return ImageBox(x=(page_w - final_w) / 2, y=settings.image_top_mm, w=final_w, h=final_h)


class ProofRenderer(IProofRenderer):
    """打样PDF渲染器实现"""

    def __init__(self, settings: ProofConfig | None = None):
        self.settings = settings or get_config().proof

    def render(self, raster: RasterMap, width_mm: float, height_mm: float) -> bytes:
        try:
            pdf = self._build(raster, width_mm, height_mm)
            return bytes(pdf.output())
        except Exception as e:
            raise ExportError(f"打样PDF生成失败: {e}") from e

    def write(self, raster: RasterMap, width_mm: float, height_mm: float, pdf_path: Path) -> Path:
        pdf_path.parent.mkdir(parents=True, exist_ok=True)
        pdf_path.write_bytes(self.render(raster, width_mm, height_mm))
        logger.info(f"打样PDF已输出: {pdf_path}")
        return pdf_path

    def _build(self, raster: RasterMap, width_mm: float, height_mm: float) -> FPDF:
        s = self.settings
        orientation = "L" if width_mm > height_mm else "P"
        pdf = FPDF(orientation=orientation, unit="mm", format=s.page_format)
        pdf.set_auto_page_break(False)
        pdf.add_page()

        pdf.set_font("Helvetica", size=18)
        pdf.text(10, 10, s.title)
        pdf.set_font("Helvetica", size=10)
        pdf.text(10, 16, f"Dimensions: {format_number(width_mm)}mm x {format_number(height_mm)}mm")

        box = fit_image_box(pdf.w, pdf.h, width_mm, height_mm, s)
        pdf.image(raster.image, x=box.x, y=box.y, w=box.w, h=box.h)
        return pdf
