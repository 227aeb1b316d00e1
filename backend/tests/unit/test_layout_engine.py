"""
布局引擎单元测试
"""

import pytest

from plaque.config import RasterConfig
from plaque.engraving import LayoutEngine, compute_layout
from plaque.models import DesignConfig


class TestLayoutEngine:
    """布局引擎测试"""

    @pytest.fixture
    def engine(self, raster_settings: RasterConfig, measure) -> LayoutEngine:
        return LayoutEngine(raster_settings, measure=measure)

    def test_layout_qr_box(self, engine: LayoutEngine, sample_design: DesignConfig):
        """测试二维码包围盒位置与尺寸"""
        plan = engine.compute(sample_design, 25)
        assert plan.resolution == 1024
        assert plan.qr_box.size == pytest.approx(460.8)
        assert plan.qr_box.x == pytest.approx((1024 - 460.8) / 2)
        assert plan.qr_box.y == pytest.approx(409.6)
        assert plan.qr_box.cell_size == pytest.approx(460.8 / 25)

    def test_layout_text_anchor(self, engine: LayoutEngine, sample_design: DesignConfig):
        plan = engine.compute(sample_design, 25)
        assert plan.text_anchor == pytest.approx((512, 204.8))
        assert plan.text == "Scan For Info"

    def test_layout_border_toggle(self, engine: LayoutEngine, sample_design: DesignConfig):
        """测试边框开关"""
        on = engine.compute(sample_design, 21)
        off = engine.compute(sample_design.with_changes(border=False), 21)
        assert on.border_enabled and on.border_stroke == 20
        assert not off.border_enabled and off.border_stroke == 0
        assert off.border_inset == 0

    def test_layout_independent_of_dimensions(self, engine: LayoutEngine, sample_design: DesignConfig):
        """测试归一化布局与物理宽高无关"""
        a = engine.compute(sample_design, 21)
        b = engine.compute(sample_design.with_changes(width=300, height=80), 21)
        assert a.qr_box == b.qr_box
        assert a.border_stroke == b.border_stroke
        assert a.text_anchor == b.text_anchor

    def test_layout_font_fit(self, engine: LayoutEngine, sample_design: DesignConfig):
        """测试长标题字号缩小"""
        plan = engine.compute(sample_design.with_changes(text="X" * 15), 21)
        assert plan.font_size == 90
        assert plan.text_width <= 1024 * 0.8

    def test_layout_radius_clamp(self, engine: LayoutEngine):
        """测试圆角钳制"""
        plan = engine.compute(DesignConfig(width=40, height=100, radius=50), 21)
        assert plan.corner_radius == 20

    def test_layout_multiline_text_flattened(self, engine: LayoutEngine, sample_design: DesignConfig):
        plan = engine.compute(sample_design.with_changes(text="Line1\nLine2"), 21)
        assert plan.text == "Line1 Line2"

    def test_layout_deterministic(self, raster_settings, measure, sample_design):
        """测试纯函数：相同输入相同输出"""
        a = compute_layout(sample_design, 29, measure=measure, settings=raster_settings)
        b = compute_layout(sample_design, 29, measure=measure, settings=raster_settings)
        assert a == b
