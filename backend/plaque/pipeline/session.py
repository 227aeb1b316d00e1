"""
设计会话 - 配置变更、防抖预览与导出编排

职责：
1. 持有当前设计配置，变更时调度防抖再生成
2. 发布最新预览（位图交由渲染端独占）
3. 导出DXF/打样PDF，保证使用当前显示预览的QR矩阵
4. 预览失败与导出失败相互隔离

说明：
- 尚无预览时导出为空操作（返回 None）
- 当前配置已变更而预览尚未刷新时拒绝导出（StaleExportError）
- 再生成失败时保留上一次预览

测试要点：
- test_session_publishes_preview: 变更后发布预览
- test_export_without_preview: 无预览时返回 None
- test_export_stale: 配置已变更时拒绝导出
- test_export_failure_isolated: 导出失败不影响预览
- test_preview_failure_keeps_previous: 再生成失败保留旧预览
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from ..config import get_config
from ..export import DXFExporter, ProofRenderer, dxf_filename
from ..interfaces import ExportError, IProofRenderer, IVectorExporter, StaleExportError
from ..models import DesignConfig, PreviewResult
from .preview import PreviewPipeline
from .scheduler import DebouncedScheduler

logger = logging.getLogger(__name__)


class DesignSession:
    """设计会话"""

    def __init__(
        self,
        config: DesignConfig | None = None,
        pipeline: PreviewPipeline | None = None,
        exporter: IVectorExporter | None = None,
        proof_renderer: IProofRenderer | None = None,
        on_preview: Callable[[PreviewResult], None] | None = None,
        debounce_ms: int | None = None,
    ):
        runtime = get_config()
        self._config = config or DesignConfig()
        self.pipeline = pipeline or PreviewPipeline()
        self.exporter = exporter or DXFExporter()
        self.proof_renderer = proof_renderer or ProofRenderer()
        self.proof_filename = runtime.proof.filename
        self._on_preview = on_preview
        self._preview: PreviewResult | None = None
        self.last_error: Exception | None = None

        delay = runtime.preview.debounce_ms if debounce_ms is None else debounce_ms
        self._scheduler: DebouncedScheduler[DesignConfig, PreviewResult] = DebouncedScheduler(
            worker=self.pipeline.generate_async,
            on_result=self._publish,
            on_error=self._on_failure,
            delay_ms=delay,
        )

    # === 状态 ===

    @property
    def config(self) -> DesignConfig:
        return self._config

    @property
    def preview(self) -> PreviewResult | None:
        return self._preview

    @property
    def scheduler(self) -> DebouncedScheduler[DesignConfig, PreviewResult]:
        return self._scheduler

    @property
    def is_fresh(self) -> bool:
        """显示中的预览是否对应当前配置"""
        return self._preview is not None and self._preview.config == self._config

    # === 配置变更 ===

    def set_config(self, config: DesignConfig) -> int:
        """替换配置并调度再生成，返回代次"""
        self._config = config
        return self._scheduler.schedule(config)

    def update(self, **changes: Any) -> int:
        """按字段更新配置"""
        return self.set_config(self._config.with_changes(**changes))

    async def wait_idle(self) -> None:
        await self._scheduler.flush()

    async def close(self) -> None:
        await self._scheduler.close()

    # === 导出 ===

    def export_dxf(self) -> str | None:
        """基于当前配置与显示中预览的QR矩阵导出DXF"""
        preview = self._require_preview("DXF")
        if preview is None:
            return None
        try:
            return self.exporter.export(self._config, preview.matrix)
        except ExportError:
            raise
        except Exception as e:
            logger.exception("DXF导出失败")
            raise ExportError(f"DXF导出失败: {e}") from e

    def export_dxf_file(self, output_dir: Path) -> Path | None:
        content = self.export_dxf()
        if content is None:
            return None
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / dxf_filename(self._config)
        path.write_text(content, encoding="utf-8", newline="\n")
        logger.info(f"DXF已输出: {path}")
        return path

    def export_proof(self) -> bytes | None:
        """打样PDF：嵌入显示中的位图，按当前物理尺寸缩放"""
        preview = self._require_preview("打样PDF")
        if preview is None:
            return None
        return self.proof_renderer.render(preview.raster, self._config.width, self._config.height)

    def export_proof_file(self, output_dir: Path) -> Path | None:
        preview = self._require_preview("打样PDF")
        if preview is None:
            return None
        return self.proof_renderer.write(
            preview.raster,
            self._config.width,
            self._config.height,
            output_dir / self.proof_filename,
        )

    def _require_preview(self, what: str) -> PreviewResult | None:
        preview = self._preview
        if preview is None or preview.matrix.is_empty:
            logger.info(f"尚无预览数据，跳过{what}导出")
            return None
        if preview.config != self._config:
            raise StaleExportError(
                f"预览尚未刷新到当前配置（预览代次 {preview.generation}，"
                f"最新代次 {self._scheduler.generation}），拒绝导出{what}"
            )
        return preview

    # === 回调 ===

    def _publish(self, result: PreviewResult) -> None:
        self._preview = result
        self.last_error = None
        logger.info(f"预览已更新: 代次 {result.generation}")
        if self._on_preview is not None:
            try:
                self._on_preview(result)
            except Exception:
                logger.exception("预览回调执行失败")

    def _on_failure(self, exc: Exception, generation: int) -> None:
        self.last_error = exc
        logger.error(f"预览再生成失败(代次 {generation})，保留上一次预览: {exc}")
