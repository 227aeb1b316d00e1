"""
命令行入口测试
"""

import io

import pytest
from PIL import Image

from plaque import cli
from plaque.interfaces import RasterError


def test_render_outputs(temp_dir):
    code = cli.main([
        "render", "--text", "A", "--url", "https://x",
        "--width", "120", "--height", "80",
        "--out", str(temp_dir), "--png", "--pdf",
    ])
    assert code == 0
    assert (temp_dir / "plaque-120x80.dxf").read_text(encoding="utf-8").endswith("0\nEOF\n")
    png = (temp_dir / "plaque-120x80.png").read_bytes()
    assert png.startswith(b"\x89PNG\r\n\x1a\n")
    with Image.open(io.BytesIO(png)) as image:
        assert image.size == (1024, 1024)
        assert image.mode == "L"
    assert (temp_dir / "plaque-design.pdf").read_bytes().startswith(b"%PDF")


def test_render_dxf_only(temp_dir):
    assert cli.main(["render", "--no-border", "--out", str(temp_dir)]) == 0
    assert [p.name for p in temp_dir.iterdir()] == ["plaque-150x150.dxf"]


def test_render_failure_exit_code(temp_dir, monkeypatch):
    class BrokenPipeline:
        def generate(self, config, generation=0):
            raise RasterError("no memory")

    monkeypatch.setattr(cli, "PreviewPipeline", BrokenPipeline)
    assert cli.main(["render", "--out", str(temp_dir)]) == 1


def test_invalid_material():
    with pytest.raises(SystemExit):
        cli.main(["render", "--material", "wood"])
