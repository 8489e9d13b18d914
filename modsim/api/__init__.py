"""
API路由包
诊断用只读接口

路由:
- modules: 模块与依赖图查询
- config: 配置默认值与验证
"""

from modsim.api import config, modules

__all__ = ["config", "modules"]
