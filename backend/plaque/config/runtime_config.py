"""
运行期配置 - 读取 config/plaque_runtime.yaml

职责：
- 加载位图/导出/QR/预览/打样等参数
- 提供环境变量覆盖机制（前缀 PLAQUE_，嵌套分隔符 __）
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

DEFAULT_CONFIG_PATH = Path("config/plaque_runtime.yaml")


class RasterConfig(BaseModel):
    """雕刻位图（归一化空间）配置"""

    resolution: int = 1024
    border_stroke: int = 20
    text_anchor_ratio: float = 0.2
    text_max_width_ratio: float = 0.8
    font_initial: int = 120
    font_step: int = 5
    font_floor: int = 20
    font_path: str | None = None
    qr_size_ratio: float = 0.45
    qr_top_ratio: float = 0.40


class ExportConfig(BaseModel):
    """DXF 导出（毫米空间）配置"""

    acad_version: str = "AC1009"
    insunits: int = 4  # 毫米
    cut_layer: str = "CUT_LAYER"
    engrave_layer: str = "ENGRAVE_LAYER"
    cut_color: int = 1
    engrave_color: int = 7
    border_color: int = 5
    border_margin_mm: float = 3.0
    text_anchor_ratio: float = 0.8
    text_height_divisor: float = 10.0
    text_height_cap_mm: float = 10.0
    qr_size_ratio: float = 0.4
    qr_center_ratio: float = 0.35


class QRConfig(BaseModel):
    """QR 编码配置"""

    ec_level: str = "M"
    fallback_url: str = "https://example.com"


class PreviewConfig(BaseModel):
    """预览再生成配置"""

    debounce_ms: int = 300


class ProofConfig(BaseModel):
    """打样PDF配置"""

    title: str = "Plaque Design Proof"
    page_format: str = "A4"
    margin_mm: float = 20.0
    header_mm: float = 40.0
    image_top_mm: float = 30.0
    filename: str = "plaque-design.pdf"


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_to_file: bool = False
    log_file: str = "plaque.log"


class RuntimeConfig(BaseSettings):
    """运行期配置（环境变量 > YAML > 默认值）"""

    output_dir: Path = Path("output")

    raster: RasterConfig = Field(default_factory=RasterConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    qr: QRConfig = Field(default_factory=QRConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)
    proof: ProofConfig = Field(default_factory=ProofConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "PLAQUE_",
        "env_nested_delimiter": "__",
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """YAML 内容经初始化参数传入，环境变量按字段逐项覆盖其上"""
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        # 以字典传入，便于与环境变量逐字段合并
        config = cls(
            **{
                key: cls._extract(runtime_opts, key)
                for key in ("raster", "export", "qr", "preview", "proof", "logging")
            }
        )

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """解析相对路径配置为绝对路径（基于配置文件所在目录）"""
        if self.raster.font_path:
            font_path = Path(self.raster.font_path)
            if not font_path.is_absolute():
                self.raster.font_path = str((base_dir / font_path).resolve())


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_CONFIG_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_CONFIG_PATH
    _config = RuntimeConfig.from_yaml(path)
    return _config
