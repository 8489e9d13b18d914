"""
接口依赖
提供路由共享的模块注册表及统一响应格式
"""

from typing import Any, Optional
from pydantic import BaseModel, Field

from modsim.core.module_registry import ModuleRegistry
from modsim.core.simulation import default_registry


class APIResponse(BaseModel):
    """统一API响应格式"""
    success: bool = Field(description="请求是否成功")
    message: str = Field(description="响应消息")
    data: Optional[Any] = Field(default=None, description="响应数据")


def get_registry() -> ModuleRegistry:
    """获取模块注册表（create_app可覆盖）"""
    return default_registry
