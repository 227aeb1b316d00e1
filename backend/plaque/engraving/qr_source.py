"""
QR 编码源 - 将URL编码为模块矩阵

职责：
1. 调用 qrcode 库生成模块矩阵（无静区，自动选择版本）
2. URL为空或编码失败时替换为固定占位URL，不向上抛出

依赖：
- qrcode: QR编码（外部确定性黑盒）
- 运行期配置: qr.ec_level / qr.fallback_url

测试要点：
- test_encode_square_matrix: 输出为方阵
- test_encode_deterministic: 相同输入得到相同矩阵
- test_empty_url_fallback: 空URL使用占位URL
- test_overflow_fallback: 超长数据使用占位URL
"""

from __future__ import annotations

import logging

import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q

from ..config import get_config
from ..interfaces import EncodingError, IQRSource
from ..models import QRMatrix

logger = logging.getLogger(__name__)

EC_LEVELS: dict[str, int] = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


class QRSource(IQRSource):
    """基于 qrcode 库的编码源"""

    def __init__(self, ec_level: str | None = None, fallback_url: str | None = None):
        config = get_config()
        self.ec_level = self._resolve_level(ec_level or config.qr.ec_level)
        self.fallback_url = fallback_url or config.qr.fallback_url

    def encode(self, url: str, ec_level: str | None = None) -> QRMatrix:
        """编码URL；失败时回落到占位URL"""
        level = self._resolve_level(ec_level) if ec_level else self.ec_level

        target = url if url and url.strip() else ""
        if not target:
            logger.warning(f"QR URL为空，使用占位URL: {self.fallback_url}")
            target = self.fallback_url

        try:
            modules = self._build_modules(target, level)
        except Exception as e:
            if target == self.fallback_url:
                raise EncodingError(f"占位URL编码失败: {e}") from e
            logger.warning(f"QR编码失败，使用占位URL: {e}")
            target = self.fallback_url
            modules = self._build_modules(target, level)

        return QRMatrix(modules=modules, url=target)

    @staticmethod
    def _build_modules(data: str, level: int) -> list[list[bool]]:
        qr = qrcode.QRCode(version=None, error_correction=level, border=0)
        qr.add_data(data)
        qr.make(fit=True)
        return [[bool(cell) for cell in row] for row in qr.get_matrix()]

    @staticmethod
    def _resolve_level(name: str) -> int:
        key = name.strip().upper()
        if key not in EC_LEVELS:
            raise EncodingError(f"未知纠错等级: {name}（应为 L/M/Q/H）")
        return EC_LEVELS[key]
