"""
导出模块 - DXF/打样PDF/文件命名

子模块：
- dxf_writer: 组码记录写入器（手写R12格式）
- dxf_exporter: 毫米空间几何推导与DXF导出
- proof: 打样PDF（fpdf2）
- naming: 下载文件命名
"""

from .dxf_exporter import DXFExporter, QRPlacement
from .dxf_writer import DXFWriter, GroupCode, format_number
from .naming import dxf_filename, raster_filename
from .proof import ImageBox, ProofRenderer, fit_image_box

__all__ = [
    "DXFExporter",
    "QRPlacement",
    "DXFWriter",
    "GroupCode",
    "format_number",
    "dxf_filename",
    "raster_filename",
    "ProofRenderer",
    "ImageBox",
    "fit_image_box",
]
