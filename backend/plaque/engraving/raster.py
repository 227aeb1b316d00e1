"""
位图合成器 - 按布局计划绘制雕刻位图

职责：
1. 背景填充表面值
2. 边框描边（向内缩进半个描边宽度）
3. 标题文字居中绘制
4. 逐个填充深色二维码模块

说明：
- 后绘制覆盖先绘制；极性固定（表面=255，雕刻=0），与材质无关
- 材质相关的极性反转由下游着色器负责
- 每次调用相互独立，不保留任何引用

依赖：
- Pillow: Image/ImageDraw 绘图

测试要点：
- test_compose_size_mode: 尺寸与模式
- test_compose_border: 边框像素
- test_compose_qr_cells: 深色模块像素与计数
- test_compose_empty_text: 空标题无字形残留
"""

from __future__ import annotations

import logging

from PIL import Image, ImageDraw

from ..config import RasterConfig, get_config
from ..interfaces import IRasterCompositor, RasterError
from ..models import ENGRAVED, SURFACE, LayoutPlan, QRMatrix, RasterMap
from .font_fit import PillowTextMeasurer

logger = logging.getLogger(__name__)


class RasterCompositor(IRasterCompositor):
    """位图合成器实现"""

    def __init__(
        self,
        settings: RasterConfig | None = None,
        fonts: PillowTextMeasurer | None = None,
    ):
        self.settings = settings or get_config().raster
        self.fonts = fonts or PillowTextMeasurer(self.settings.font_path)

    def compose(self, plan: LayoutPlan, matrix: QRMatrix) -> RasterMap:
        """生成 R×R 雕刻位图"""
        if plan.qr_box.module_count != matrix.module_count:
            raise RasterError(
                f"布局模块数({plan.qr_box.module_count})与QR矩阵({matrix.module_count})不一致"
            )

        resolution = plan.resolution
        try:
            image = Image.new("L", (resolution, resolution), SURFACE)
            draw = ImageDraw.Draw(image)
        except (ValueError, MemoryError, OSError) as e:
            raise RasterError(f"无法创建绘图上下文: {e}") from e

        border_drawn = self._draw_border(draw, plan)
        self._draw_text(draw, plan)
        dark_cells = self._draw_qr(draw, plan, matrix)

        logger.debug(f"位图合成完成: {resolution}px, 模块 {dark_cells}, 边框 {border_drawn}")
        return RasterMap(
            image=image,
            resolution=resolution,
            dark_cells=dark_cells,
            border_drawn=border_drawn,
        )

    def _draw_border(self, draw: ImageDraw.ImageDraw, plan: LayoutPlan) -> bool:
        """描边居中于 inset 处，等价于从边缘向内覆盖 stroke 像素"""
        if not plan.border_enabled or plan.border_stroke <= 0:
            return False
        last = plan.resolution - 1
        draw.rectangle((0, 0, last, last), outline=ENGRAVED, width=plan.border_stroke)
        return True

    def _draw_text(self, draw: ImageDraw.ImageDraw, plan: LayoutPlan) -> None:
        if not plan.has_text:
            return
        font = self.fonts.font(plan.font_size)
        draw.text(plan.text_anchor, plan.text, fill=ENGRAVED, font=font, anchor="mm")

    def _draw_qr(self, draw: ImageDraw.ImageDraw, plan: LayoutPlan, matrix: QRMatrix) -> int:
        """逐个填充深色模块；浅色模块保持背景"""
        count = 0
        for row, col in matrix.dark_cells():
            x0, y0, x1, y1 = plan.qr_box.cell_rect(row, col)
            left, top = round(x0), round(y0)
            # 相邻模块共享取整边界，右/下边界为开区间
            right = max(left, round(x1) - 1)
            bottom = max(top, round(y1) - 1)
            draw.rectangle((left, top, right, bottom), fill=ENGRAVED)
            count += 1
        return count
