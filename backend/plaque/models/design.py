"""
设计配置模型 - 铭牌的文字/二维码/物理尺寸

所有尺寸单位均为毫米；material 仅透传给预览渲染端，核心不读取
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class MaterialType(str, Enum):
    """材质枚举"""
    STEEL = "steel"
    COPPER = "copper"
    GRANITE = "granite"
    GOLD = "gold"


class DesignConfig(BaseModel):
    """铭牌设计配置（不可变快照）"""
    text: str = Field("Scan For Info", description="标题文字")
    qr_url: str = Field("https://example.com/your-page", alias="qrUrl", description="二维码目标URL")
    width: float = Field(150.0, description="宽度(mm)")
    height: float = Field(150.0, description="高度(mm)")
    depth: float = Field(5.0, description="厚度(mm)")
    radius: float = Field(10.0, description="圆角半径(mm)")
    border: bool = Field(True, description="是否雕刻内边框")
    material: MaterialType = MaterialType.STEEL

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def effective_radius(self) -> float:
        """钳制后的圆角半径，保证圆角矩形几何有效"""
        return min(self.radius, self.width / 2, self.height / 2)

    def with_changes(self, **changes) -> DesignConfig:
        """返回应用了变更的新快照"""
        return DesignConfig.model_validate({**self.model_dump(), **changes})
