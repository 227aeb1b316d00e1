"""
预览流水线 - QR编码 → 布局 → 位图合成

职责：
1. 编码QR（失败时由编码源回落到占位URL）
2. 计算归一化布局
3. 合成雕刻位图

测试要点：
- test_generate_preview: 结果包含配置快照/矩阵/位图
- test_generate_async: 在线程中执行，可被挂起
"""

from __future__ import annotations

import asyncio
import logging

from ..config import get_config
from ..engraving import LayoutEngine, PillowTextMeasurer, QRSource, RasterCompositor
from ..interfaces import ILayoutEngine, IQRSource, IRasterCompositor
from ..models import DesignConfig, PreviewResult

logger = logging.getLogger(__name__)


class PreviewPipeline:
    """预览再生成流水线"""

    def __init__(
        self,
        qr_source: IQRSource | None = None,
        layout_engine: ILayoutEngine | None = None,
        compositor: IRasterCompositor | None = None,
        ec_level: str | None = None,
    ):
        config = get_config()
        self.ec_level = ec_level or config.qr.ec_level
        self.qr_source = qr_source or QRSource(ec_level=self.ec_level)

        # 布局与合成共用同一份字体缓存，保证度量与绘制一致
        fonts = PillowTextMeasurer(config.raster.font_path)
        self.layout_engine = layout_engine or LayoutEngine(config.raster, measure=fonts)
        self.compositor = compositor or RasterCompositor(config.raster, fonts=fonts)

    def generate(self, config: DesignConfig, generation: int = 0) -> PreviewResult:
        """同步生成一次预览"""
        matrix = self.qr_source.encode(config.qr_url, self.ec_level)
        plan = self.layout_engine.compute(config, matrix.module_count)
        raster = self.compositor.compose(plan, matrix)
        logger.debug(f"预览生成完成: 代次 {generation}, 模块 {matrix.module_count}")
        return PreviewResult(
            generation=generation,
            config=config,
            matrix=matrix,
            plan=plan,
            raster=raster,
        )

    async def generate_async(self, config: DesignConfig, generation: int = 0) -> PreviewResult:
        """在工作线程中生成，调用方可在等待期间取消"""
        return await asyncio.to_thread(self.generate, config, generation)
