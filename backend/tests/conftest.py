"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(sample_design, diagonal_matrix):
        assert sample_design.width == 150
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from plaque.config import ExportConfig, ProofConfig, RasterConfig, RuntimeConfig
from plaque.models import DesignConfig, MaterialType, QRMatrix

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置（默认值）"""
    return RuntimeConfig()


@pytest.fixture
def raster_settings() -> RasterConfig:
    return RasterConfig()


@pytest.fixture
def export_settings() -> ExportConfig:
    return ExportConfig()


@pytest.fixture
def proof_settings() -> ProofConfig:
    return ProofConfig()


# ============================================================================
# 字形度量 Fixtures
# ============================================================================

def fixed_width_measure(text: str, font_size: int) -> float:
    """等宽度量：每字符 0.6 倍字号"""
    return len(text) * font_size * 0.6


@pytest.fixture
def measure():
    return fixed_width_measure


# ============================================================================
# 数据模型 Fixtures
# ============================================================================

@pytest.fixture
def sample_design() -> DesignConfig:
    """示例设计（与默认配置一致）"""
    return DesignConfig(
        text="Scan For Info",
        qr_url="https://example.com/your-page",
        width=150,
        height=150,
        depth=5,
        radius=10,
        border=True,
        material=MaterialType.STEEL,
    )


@pytest.fixture
def golden_design() -> DesignConfig:
    """金样文件对应的设计"""
    return DesignConfig(
        text="Hi",
        qr_url="https://x",
        width=100,
        height=50,
        depth=3,
        radius=5,
        border=True,
    )


@pytest.fixture
def diagonal_matrix() -> QRMatrix:
    """2×2 对角矩阵"""
    return QRMatrix(modules=[[True, False], [False, True]])


@pytest.fixture
def checker_matrix() -> QRMatrix:
    """21×21 棋盘矩阵（与版本1二维码同尺寸）"""
    size = 21
    return QRMatrix(modules=[[(r + c) % 2 == 0 for c in range(size)] for r in range(size)])


@pytest.fixture
def empty_matrix() -> QRMatrix:
    return QRMatrix(modules=[])


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def golden_dxf() -> str:
    return (FIXTURES_DIR / "golden_100x50_diagonal.dxf").read_text(encoding="utf-8")
