"""
铭牌雕刻 - 布局与导出核心模块

模块结构：
- config/     运行期配置加载
- models/     数据模型定义（设计配置/QR矩阵/布局/位图）
- engraving/  布局计算、字号适配、位图合成、QR编码、材质预设
- export/     DXF 导出、打样PDF、文件命名
- pipeline/   预览防抖调度与设计会话
"""

__version__ = "0.1.0"
