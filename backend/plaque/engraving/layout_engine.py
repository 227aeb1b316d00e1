"""
布局引擎 - 计算归一化正方形空间中的摆放几何

职责：
1. 边框描边宽度（固定，与物理宽高无关）
2. 标题锚点与适配后的字号
3. 二维码包围盒与模块尺寸
4. 钳制后的圆角半径

说明：
- 归一化空间不保持物理宽高比，映射回3D表面时按各向异性拉伸
- 纯函数，无I/O，可在每次输入时调用

测试要点：
- test_layout_qr_box: 二维码包围盒位置与尺寸
- test_layout_border_toggle: 边框开关
- test_layout_font_fit: 长标题字号缩小
- test_layout_radius_clamp: 圆角钳制
"""

from __future__ import annotations

from ..config import RasterConfig, get_config
from ..interfaces import ILayoutEngine, TextMeasurer
from ..models import DesignConfig, LayoutPlan, QRBox
from .font_fit import PillowTextMeasurer, fit_font_size, single_line


class LayoutEngine(ILayoutEngine):
    """布局引擎实现"""

    def __init__(
        self,
        settings: RasterConfig | None = None,
        measure: TextMeasurer | None = None,
    ):
        self.settings = settings or get_config().raster
        self.measure = measure or PillowTextMeasurer(self.settings.font_path)

    def compute(self, config: DesignConfig, module_count: int) -> LayoutPlan:
        """计算布局计划"""
        s = self.settings
        resolution = s.resolution
        text = single_line(config.text)

        # 1. 标题字号
        fit = fit_font_size(
            text,
            resolution * s.text_max_width_ratio,
            self.measure,
            initial=s.font_initial,
            step=s.font_step,
            floor=s.font_floor,
        )

        # 2. 二维码包围盒（水平居中，位于标题带下方）
        qr_size = resolution * s.qr_size_ratio
        qr_box = QRBox(
            x=(resolution - qr_size) / 2,
            y=resolution * s.qr_top_ratio,
            size=qr_size,
            module_count=max(module_count, 0),
        )

        return LayoutPlan(
            resolution=resolution,
            border_enabled=config.border,
            border_stroke=s.border_stroke if config.border else 0,
            text=text,
            text_anchor=(resolution / 2, resolution * s.text_anchor_ratio),
            font_size=fit.size,
            text_width=fit.width,
            qr_box=qr_box,
            corner_radius=config.effective_radius,
        )


def compute_layout(
    config: DesignConfig,
    module_count: int,
    measure: TextMeasurer | None = None,
    settings: RasterConfig | None = None,
) -> LayoutPlan:
    """便捷函数：一次性计算布局"""
    return LayoutEngine(settings=settings, measure=measure).compute(config, module_count)
