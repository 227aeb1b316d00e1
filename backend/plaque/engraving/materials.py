"""
材质预设 - 材质枚举到着色参数的固定映射

属于预览渲染端的关注点，位图合成器不读取；
雕刻位图同时作为 bump/roughness/metalness 贴图，极性反转在这里声明
"""

from __future__ import annotations

from pydantic import BaseModel

from ..models import DesignConfig, MaterialType

DEFAULT_BUMP_SCALE = 0.05
SCENE_UNITS_PER_MM = 0.1  # 3D场景以厘米为单位


class MaterialFinish(BaseModel):
    """单种材质的着色参数"""
    color: str
    metalness: float
    roughness: float
    clearcoat: float
    bump_scale: float = DEFAULT_BUMP_SCALE
    uses_metalness_map: bool = True

    model_config = {"frozen": True}

    @property
    def inverts_displacement(self) -> bool:
        """石材类：雕刻向内凹"""
        return self.bump_scale < 0


MATERIAL_FINISHES: dict[MaterialType, MaterialFinish] = {
    MaterialType.GOLD: MaterialFinish(
        color="#FFD700", metalness=1.0, roughness=0.15, clearcoat=0.8,
    ),
    MaterialType.COPPER: MaterialFinish(
        color="#B87333", metalness=0.9, roughness=0.3, clearcoat=0.5,
    ),
    MaterialType.GRANITE: MaterialFinish(
        color="#222222", metalness=0.1, roughness=0.8, clearcoat=0.3,
        bump_scale=-DEFAULT_BUMP_SCALE, uses_metalness_map=False,
    ),
    MaterialType.STEEL: MaterialFinish(
        color="#e5e7eb", metalness=0.9, roughness=0.2, clearcoat=0.4,
    ),
}


def get_finish(material: MaterialType | str) -> MaterialFinish:
    """获取材质参数；未知材质按不锈钢处理"""
    try:
        key = MaterialType(material)
    except ValueError:
        key = MaterialType.STEEL
    return MATERIAL_FINISHES[key]


def scene_dimensions(config: DesignConfig) -> tuple[float, float, float, float]:
    """3D圆角盒参数 (宽, 高, 厚, 圆角)，毫米换算为场景单位"""
    return (
        config.width * SCENE_UNITS_PER_MM,
        config.height * SCENE_UNITS_PER_MM,
        config.depth * SCENE_UNITS_PER_MM,
        config.effective_radius * SCENE_UNITS_PER_MM,
    )
