"""
字号适配单元测试
"""

import pytest

from plaque.engraving import PillowTextMeasurer, fit_font_size, max_iterations


class TestFitFontSize:
    """字号适配测试"""

    def test_fit_no_shrink(self, measure):
        """测试宽度足够时不缩小"""
        fit = fit_font_size("A", 819.2, measure)
        assert fit.size == 120
        assert fit.iterations == 0

    def test_fit_shrinks_until_within_budget(self, measure):
        """测试缩小到预算内"""
        text = "X" * 15  # 120px 时宽 1080
        fit = fit_font_size(text, 819.2, measure)
        assert fit.width <= 819.2
        assert fit.size == 90  # 15*0.6*90 = 810
        assert fit.iterations == 6

    def test_fit_floor(self, measure):
        """测试到达下限后停止"""
        fit = fit_font_size("W" * 200, 819.2, measure)
        assert fit.size == 20
        assert fit.at_floor(20)
        assert fit.width > 819.2
        assert fit.iterations == max_iterations(120, 20, 5)

    @pytest.mark.parametrize("length", [1, 10, 30, 60, 500])
    def test_fit_iteration_bound(self, measure, length):
        """测试迭代次数有界，且未到下限时宽度不超预算"""
        fit = fit_font_size("m" * length, 819.2, measure)
        assert fit.iterations <= max_iterations(120, 20, 5)
        if not fit.at_floor(20):
            assert fit.width <= 819.2

    def test_fit_step_not_dividing_range(self, measure):
        """测试步长不整除区间时不越过下限"""
        fit = fit_font_size("W" * 200, 10, measure, initial=100, step=7, floor=20)
        assert fit.size == 20
        assert fit.iterations == max_iterations(100, 20, 7) == 12

    def test_fit_empty_text(self):
        """测试空文字不迭代、不度量"""
        calls = []

        def spy(text, size):
            calls.append((text, size))
            return 0.0

        fit = fit_font_size("", 819.2, spy)
        assert fit.iterations == 0
        assert calls == []

    def test_invalid_step(self, measure):
        with pytest.raises(ValueError):
            fit_font_size("A", 100, measure, step=0)


class TestPillowTextMeasurer:
    """Pillow 字形度量测试"""

    def test_width_grows_with_size(self):
        measurer = PillowTextMeasurer()
        assert measurer("Scan For Info", 60) < measurer("Scan For Info", 120)

    def test_font_cached(self):
        measurer = PillowTextMeasurer()
        assert measurer.font(40) is measurer.font(40)

    def test_missing_font_falls_back(self, temp_dir):
        measurer = PillowTextMeasurer(str(temp_dir / "missing.ttf"))
        assert measurer("A", 40) > 0
