"""
DXF 组码写入器 - 手写 R12 文本格式

每条记录是 (组码, 值) 两行，按固定顺序写出；不依赖任何DXF序列化库。

组码表：
    0     实体/段类型标记
    1     字符串值（文字内容/头变量字符串）
    2     段或块名
    8     图层名
    9     系统变量名（仅 HEADER）
    10/20 主点 X/Y
    11/21 第二（对齐）点 X/Y
    40    高度/尺寸
    62    颜色号
    70    标志位（如闭合）
    72    对齐方式
    90    顶点数
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from decimal import Decimal
from enum import IntEnum

from ..interfaces import ExportError

Point = tuple[float, float]


class GroupCode(IntEnum):
    """DXF 组码"""
    ENTITY = 0
    STRING = 1
    NAME = 2
    LAYER = 8
    VARIABLE = 9
    X = 10
    ALIGN_X = 11
    Y = 20
    ALIGN_Y = 21
    HEIGHT = 40
    COLOR = 62
    FLAGS = 70
    ALIGNMENT = 72
    COUNT = 90


CLOSED = 1
ALIGN_CENTER = 1


def format_number(value: int | float) -> str:
    """数值转文本：整数值不带小数部分，其余取最短往返表示，不用科学计数法"""
    if isinstance(value, bool):
        raise ExportError(f"不支持的布尔数值: {value}")
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        raise ExportError(f"非有限数值无法写入DXF: {value}")
    if value == 0:
        return "0"
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def format_value(value: str | int | float) -> str:
    if isinstance(value, str):
        if "\n" in value or "\r" in value:
            raise ExportError(f"DXF字符串值不能包含换行: {value!r}")
        return value
    return format_number(value)


class DXFWriter:
    """组码记录写入器"""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def pair(self, code: int, value: str | int | float) -> None:
        """写一条 (组码, 值) 记录"""
        self._lines.append(str(int(code)))
        self._lines.append(format_value(value))

    def section(self, name: str) -> None:
        self.pair(GroupCode.ENTITY, "SECTION")
        self.pair(GroupCode.NAME, name)

    def end_section(self) -> None:
        self.pair(GroupCode.ENTITY, "ENDSEC")

    def header_variable(self, name: str, code: int, value: str | int | float) -> None:
        self.pair(GroupCode.VARIABLE, name)
        self.pair(code, value)

    def polyline(
        self,
        layer: str,
        color: int,
        vertices: Sequence[Point],
        closed: bool = True,
    ) -> None:
        """LWPOLYLINE：图层/颜色/顶点数/闭合标志后依次写顶点"""
        self.pair(GroupCode.ENTITY, "LWPOLYLINE")
        self.pair(GroupCode.LAYER, layer)
        self.pair(GroupCode.COLOR, color)
        self.pair(GroupCode.COUNT, len(vertices))
        self.pair(GroupCode.FLAGS, CLOSED if closed else 0)
        for x, y in vertices:
            self.pair(GroupCode.X, x)
            self.pair(GroupCode.Y, y)

    def text(
        self,
        layer: str,
        color: int,
        point: Point,
        height: float,
        value: str,
        alignment: int = ALIGN_CENTER,
    ) -> None:
        """TEXT：居中对齐时必须写出第二对齐点（与插入点相同）"""
        x, y = point
        self.pair(GroupCode.ENTITY, "TEXT")
        self.pair(GroupCode.LAYER, layer)
        self.pair(GroupCode.COLOR, color)
        self.pair(GroupCode.X, x)
        self.pair(GroupCode.Y, y)
        self.pair(GroupCode.HEIGHT, height)
        self.pair(GroupCode.STRING, value)
        self.pair(GroupCode.ALIGNMENT, alignment)
        self.pair(GroupCode.ALIGN_X, x)
        self.pair(GroupCode.ALIGN_Y, y)

    def solid(self, layer: str, color: int, corners: Sequence[Point]) -> None:
        """SOLID：四个角点按给定顺序写出（均使用 10/20 组码）"""
        if len(corners) != 4:
            raise ExportError(f"SOLID 需要4个角点，实际 {len(corners)}")
        self.pair(GroupCode.ENTITY, "SOLID")
        self.pair(GroupCode.LAYER, layer)
        self.pair(GroupCode.COLOR, color)
        for x, y in corners:
            self.pair(GroupCode.X, x)
            self.pair(GroupCode.Y, y)

    def eof(self) -> None:
        self.pair(GroupCode.ENTITY, "EOF")

    def getvalue(self) -> str:
        return "\n".join(self._lines) + "\n"
