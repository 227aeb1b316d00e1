"""
配置层 - 加载运行期配置

职责：
- 加载 config/plaque_runtime.yaml（运行期参数）
- 提供类型安全的配置访问接口
"""

from .runtime_config import (
    ExportConfig,
    LoggingConfig,
    PreviewConfig,
    ProofConfig,
    QRConfig,
    RasterConfig,
    RuntimeConfig,
    get_config,
    reload_config,
)

__all__ = [
    "RuntimeConfig",
    "RasterConfig",
    "ExportConfig",
    "QRConfig",
    "PreviewConfig",
    "ProofConfig",
    "LoggingConfig",
    "get_config",
    "reload_config",
]
