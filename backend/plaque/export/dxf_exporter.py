"""
DXF 导出器 - 毫米空间矢量几何

职责：
1. 独立于归一化布局，在毫米空间（左下原点，Y向上）重新推导几何
2. 按固定顺序写出 HEADER / ENTITIES / EOF
3. 外轮廓（切割层）、标题、二维码模块（SOLID）、可选内边框（雕刻层）

说明：
- 外轮廓是包围矩形，不做圆角插值（与预览圆角存在已知的几何差异）
- SOLID 角点顺序为 左下、右下、左上、右上，未经下游工具验证前不要调整
- 浅色模块不输出实体

依赖：
- DXFWriter: 手写组码写入器
- 运行期配置: export.*

测试要点：
- test_export_golden: 与金样文件逐字节一致
- test_export_structure: HEADER开头、单个EOF结尾
- test_export_solid_count: SOLID数 = 深色模块数
- test_export_border_toggle: 内边框开关
- test_export_empty_matrix: 空矩阵仍输出有效文档
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import ExportConfig, get_config
from ..engraving.font_fit import single_line
from ..interfaces import ExportError, IVectorExporter
from ..models import DesignConfig, QRMatrix
from .dxf_writer import DXFWriter, GroupCode, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QRPlacement:
    """二维码在毫米空间中的位置"""
    start_x: float
    start_y: float
    size: float
    module_size: float

    @property
    def top(self) -> float:
        return self.start_y + self.size

    def module_corners(self, row: int, col: int) -> list[Point]:
        """行号自上而下，CAD坐标自下而上，需要翻转Y"""
        m = self.module_size
        x = self.start_x + col * m
        y = self.top - row * m
        return [
            (x, y - m),       # 左下
            (x + m, y - m),   # 右下
            (x, y),           # 左上
            (x + m, y),       # 右上
        ]


class DXFExporter(IVectorExporter):
    """DXF 导出器实现"""

    def __init__(self, settings: ExportConfig | None = None):
        self.settings = settings or get_config().export

    def export(self, config: DesignConfig, matrix: QRMatrix) -> str:
        """生成完整DXF文档"""
        try:
            return self._build(config, matrix)
        except ExportError:
            raise
        except Exception as e:
            logger.exception("DXF导出失败")
            raise ExportError(f"DXF导出失败: {e}") from e

    def qr_placement(self, config: DesignConfig, module_count: int) -> QRPlacement:
        """二维码尺寸 = min(宽,高)*比例，水平居中，中心位于高度的固定比例处"""
        s = self.settings
        w, h = config.width, config.height
        qr_size = min(w, h) * s.qr_size_ratio
        return QRPlacement(
            start_x=(w - qr_size) / 2,
            start_y=(h * s.qr_center_ratio) - (qr_size / 2),
            size=qr_size,
            module_size=qr_size / module_count if module_count else 0.0,
        )

    def text_height(self, config: DesignConfig) -> float:
        s = self.settings
        return min(config.width / s.text_height_divisor, s.text_height_cap_mm)

    def _build(self, config: DesignConfig, matrix: QRMatrix) -> str:
        s = self.settings
        writer = DXFWriter()

        # 1. HEADER
        writer.section("HEADER")
        writer.header_variable("$ACADVER", GroupCode.STRING, s.acad_version)
        writer.header_variable("$INSUNITS", GroupCode.FLAGS, s.insunits)
        writer.end_section()

        # 2. ENTITIES
        writer.section("ENTITIES")
        self._write_outline(writer, config)
        self._write_title(writer, config)
        solids = self._write_qr(writer, config, matrix)
        if config.border:
            self._write_border(writer, config)
        writer.end_section()

        # 3. EOF
        writer.eof()

        logger.info(
            f"DXF导出完成: {config.width}x{config.height}mm, SOLID {solids}, 内边框 {config.border}"
        )
        return writer.getvalue()

    def _write_outline(self, writer: DXFWriter, config: DesignConfig) -> None:
        """外轮廓：切割层矩形（不含圆角）"""
        s = self.settings
        w, h = config.width, config.height
        writer.polyline(
            s.cut_layer,
            s.cut_color,
            [(0, 0), (w, 0), (w, h), (0, h)],
        )

    def _write_title(self, writer: DXFWriter, config: DesignConfig) -> None:
        s = self.settings
        text = single_line(config.text)
        if not text.strip():
            return
        anchor = (config.width / 2, config.height * s.text_anchor_ratio)
        writer.text(s.engrave_layer, s.engrave_color, anchor, self.text_height(config), text)

    def _write_qr(self, writer: DXFWriter, config: DesignConfig, matrix: QRMatrix) -> int:
        """每个深色模块一个SOLID，行优先"""
        s = self.settings
        placement = self.qr_placement(config, matrix.module_count)
        count = 0
        for row, col in matrix.dark_cells():
            writer.solid(s.engrave_layer, s.engrave_color, placement.module_corners(row, col))
            count += 1
        return count

    def _write_border(self, writer: DXFWriter, config: DesignConfig) -> None:
        """内边框：内缩固定边距，首点重复以闭合"""
        s = self.settings
        m = s.border_margin_mm
        w, h = config.width, config.height
        writer.polyline(
            s.engrave_layer,
            s.border_color,
            [(m, m), (w - m, m), (w - m, h - m), (m, h - m), (m, m)],
        )
