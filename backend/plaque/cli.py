"""
命令行入口 - 由设计参数输出 DXF / 雕刻位图 / 打样PDF

使用方式：
    plaque render --text "Scan For Info" --url https://example.com --width 150 --height 150 --out output --png --pdf
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from .config import get_config, reload_config
from .export import DXFExporter, ProofRenderer, dxf_filename, raster_filename
from .interfaces import PlaqueError
from .logging_setup import configure_logging
from .models import DesignConfig, MaterialType
from .pipeline import PreviewPipeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    defaults = DesignConfig()
    parser = argparse.ArgumentParser(description="铭牌雕刻布局与导出")
    parser.add_argument("--config", type=Path, help="运行期配置YAML（默认 config/plaque_runtime.yaml）")
    parser.add_argument("--verbose", action="store_true", help="输出调试日志")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="生成 DXF（可选 PNG/PDF）")
    render.add_argument("--text", default=defaults.text, help="标题文字")
    render.add_argument("--url", default=defaults.qr_url, help="二维码URL")
    render.add_argument("--width", type=float, default=defaults.width, help="宽度 mm")
    render.add_argument("--height", type=float, default=defaults.height, help="高度 mm")
    render.add_argument("--depth", type=float, default=defaults.depth, help="厚度 mm")
    render.add_argument("--radius", type=float, default=defaults.radius, help="圆角半径 mm")
    render.add_argument("--no-border", action="store_true", help="不雕刻内边框")
    render.add_argument(
        "--material",
        choices=[m.value for m in MaterialType],
        default=defaults.material.value,
        help="材质（仅用于预览）",
    )
    render.add_argument("--out", type=Path, default=None, help="输出目录（默认读取配置 output_dir）")
    render.add_argument("--png", action="store_true", help="同时输出雕刻位图PNG")
    render.add_argument("--pdf", action="store_true", help="同时输出打样PDF")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config:
        reload_config(args.config)
    configure_logging(verbose=args.verbose)

    if args.command == "render":
        try:
            _handle_render(args)
        except PlaqueError as e:
            logger.error(f"生成失败: {e}")
            return 1
        return 0

    parser.error("未知命令")  # pragma: no cover
    return 2


def _handle_render(args: argparse.Namespace) -> None:
    runtime = get_config()
    design = DesignConfig(
        text=args.text,
        qr_url=args.url,
        width=args.width,
        height=args.height,
        depth=args.depth,
        radius=args.radius,
        border=not args.no_border,
        material=MaterialType(args.material),
    )
    out_dir: Path = args.out or runtime.output_dir
    out_dir.mkdir(parents=True, exist_ok=True)

    preview = PreviewPipeline().generate(design)

    dxf_path = out_dir / dxf_filename(design)
    dxf_path.write_text(DXFExporter().export(design, preview.matrix), encoding="utf-8", newline="\n")
    print(f"DXF: {dxf_path} (模块 {preview.matrix.module_count}, 深色 {preview.matrix.dark_count})")

    if args.png:
        png_path = out_dir / raster_filename(design)
        png_path.write_bytes(preview.raster.to_png_bytes())
        print(f"PNG: {png_path}")

    if args.pdf:
        pdf_path = ProofRenderer().write(
            preview.raster, design.width, design.height, out_dir / runtime.proof.filename
        )
        print(f"PDF: {pdf_path}")


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
