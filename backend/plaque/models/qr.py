"""
QR 模块矩阵 - 外部编码器输出的布尔方阵

(row, col) 索引，True = 深色/雕刻
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field, model_validator


class QRMatrix(BaseModel):
    """QR 模块矩阵"""
    modules: list[list[bool]] = Field(default_factory=list)
    url: str | None = Field(None, description="实际编码的URL（可能是占位URL）")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_square(self) -> QRMatrix:
        size = len(self.modules)
        for row in self.modules:
            if len(row) != size:
                raise ValueError(f"QR矩阵必须为方阵: {size} 行, 某行 {len(row)} 列")
        return self

    @property
    def module_count(self) -> int:
        return len(self.modules)

    @property
    def is_empty(self) -> bool:
        return self.module_count == 0

    @property
    def dark_count(self) -> int:
        return sum(sum(1 for cell in row if cell) for row in self.modules)

    def is_dark(self, row: int, col: int) -> bool:
        return self.modules[row][col]

    def dark_cells(self) -> Iterator[tuple[int, int]]:
        """按行优先（自上而下、自左而右）遍历深色模块"""
        for r, row in enumerate(self.modules):
            for c, cell in enumerate(row):
                if cell:
                    yield r, c
