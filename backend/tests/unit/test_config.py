"""
配置加载单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_config.py -v
"""

from pathlib import Path

import pytest

from plaque.config import RuntimeConfig


class TestRuntimeConfig:
    """运行期配置测试"""

    def test_default_config(self, runtime_config: RuntimeConfig):
        """测试默认配置"""
        assert runtime_config.raster.resolution == 1024
        assert runtime_config.raster.border_stroke == 20
        assert runtime_config.export.border_margin_mm == 3.0
        assert runtime_config.qr.ec_level == "M"
        assert runtime_config.preview.debounce_ms == 300

    def test_from_yaml_missing_file(self, temp_dir: Path):
        """测试配置文件不存在时使用默认值"""
        config = RuntimeConfig.from_yaml(temp_dir / "missing.yaml")
        assert config.raster.font_floor == 20

    def test_from_yaml_default_leaves(self, temp_dir: Path):
        """测试 {default: 值} 形式的叶子节点"""
        path = temp_dir / "runtime.yaml"
        path.write_text(
            "runtime_options:\n"
            "  raster:\n"
            "    resolution:\n"
            "      default: 512\n"
            "      desc: 分辨率\n"
            "    font_path: fonts/Inter-Bold.ttf\n"
            "  export:\n"
            "    border_margin_mm: 5\n"
            "  preview:\n"
            "    debounce_ms: 50\n",
            encoding="utf-8",
        )
        config = RuntimeConfig.from_yaml(path)
        assert config.raster.resolution == 512
        assert config.export.border_margin_mm == 5.0
        assert config.preview.debounce_ms == 50
        # 相对路径基于配置文件目录解析
        assert Path(config.raster.font_path) == (temp_dir / "fonts/Inter-Bold.ttf").resolve()

    def test_repo_yaml_matches_defaults(self):
        """测试仓库自带的配置文件与默认值一致"""
        repo_yaml = Path(__file__).resolve().parents[3] / "config" / "plaque_runtime.yaml"
        config = RuntimeConfig.from_yaml(repo_yaml)
        defaults = RuntimeConfig()
        assert config.raster == defaults.raster
        assert config.export == defaults.export
        assert config.qr == defaults.qr

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        """测试环境变量覆盖"""
        monkeypatch.setenv("PLAQUE_PREVIEW__DEBOUNCE_MS", "120")
        config = RuntimeConfig()
        assert config.preview.debounce_ms == 120

    def test_env_overrides_yaml(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        """测试环境变量覆盖YAML中的同名字段，其余YAML字段保留"""
        path = temp_dir / "runtime.yaml"
        path.write_text(
            "runtime_options:\n"
            "  raster:\n"
            "    resolution: 512\n"
            "  preview:\n"
            "    debounce_ms:\n"
            "      default: 50\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("PLAQUE_PREVIEW__DEBOUNCE_MS", "120")
        monkeypatch.setenv("PLAQUE_QR__EC_LEVEL", "H")
        config = RuntimeConfig.from_yaml(path)
        assert config.preview.debounce_ms == 120
        assert config.qr.ec_level == "H"
        assert config.raster.resolution == 512

    def test_env_overrides_repo_yaml(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PLAQUE_PREVIEW__DEBOUNCE_MS", "120")
        repo_yaml = Path(__file__).resolve().parents[3] / "config" / "plaque_runtime.yaml"
        config = RuntimeConfig.from_yaml(repo_yaml)
        assert config.preview.debounce_ms == 120
        assert config.raster.resolution == 1024
