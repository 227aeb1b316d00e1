"""
字号适配 - 逐级缩小字号直到文字宽度不超出预算

职责：
1. 固定步长缩小字号，至下限为止（迭代次数有界）
2. 提供基于 Pillow 的字形度量实现

依赖：
- Pillow: ImageFont 字形度量

测试要点：
- test_fit_no_shrink: 宽度足够时不缩小
- test_fit_iteration_bound: 迭代次数 ≤ ceil((initial-floor)/step)
- test_fit_floor: 达到下限后停止
- test_fit_empty_text: 空文字不迭代
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from PIL import ImageFont

from ..interfaces import TextMeasurer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontFit:
    """字号适配结果"""
    size: int
    width: float
    iterations: int

    def at_floor(self, floor: int) -> bool:
        return self.size <= floor


def max_iterations(initial: int, floor: int, step: int) -> int:
    """缩小循环的迭代上限"""
    if initial <= floor:
        return 0
    return math.ceil((initial - floor) / step)


def fit_font_size(
    text: str,
    max_width: float,
    measure: TextMeasurer,
    initial: int = 120,
    step: int = 5,
    floor: int = 20,
) -> FontFit:
    """按固定步长缩小字号，直到宽度 ≤ max_width 或到达下限"""
    if step <= 0:
        raise ValueError(f"字号步长必须为正数: {step}")
    if not text:
        return FontFit(size=initial, width=0.0, iterations=0)

    size = initial
    width = measure(text, size)
    iterations = 0
    while width > max_width and size > floor:
        size = max(size - step, floor)
        iterations += 1
        width = measure(text, size)

    logger.debug(f"字号适配: {text!r} -> {size}px (宽 {width:.1f}, 迭代 {iterations})")
    return FontFit(size=size, width=width, iterations=iterations)


def single_line(text: str) -> str:
    """把多行文字压成一行（换行符替换为空格）"""
    return " ".join(text.splitlines())


class PillowTextMeasurer:
    """Pillow 字形度量，按字号缓存字体对象"""

    def __init__(self, font_path: str | None = None):
        self.font_path = font_path
        self._fonts: dict[int, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

    def __call__(self, text: str, font_size: int) -> float:
        return float(self.font(font_size).getlength(text))

    def font(self, font_size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        if font_size not in self._fonts:
            self._fonts[font_size] = self._load(font_size)
        return self._fonts[font_size]

    def _load(self, font_size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        if self.font_path:
            try:
                return ImageFont.truetype(self.font_path, font_size)
            except OSError as e:
                logger.warning(f"字体加载失败，使用内置字体: {self.font_path}: {e}")
                self.font_path = None
        return ImageFont.load_default(size=font_size)
