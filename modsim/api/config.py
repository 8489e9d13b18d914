"""
配置管理接口
提供仿真配置的默认值查询和验证功能

API端点:
- GET /api/config/default: 获取默认配置
- POST /api/config/validate: 验证配置有效性
"""

import logging
import os
from typing import Any, Dict, List
from fastapi import APIRouter, Depends
import yaml
from pydantic import BaseModel, ValidationError

from modsim.api.deps import APIResponse, get_registry
from modsim.core.module_registry import ModuleRegistry
from modsim.models.config_model import SimulationConfig
from modsim.utils.config_loader import load_simulation_config
from modsim.utils.validators import validate_simulation_config

logger = logging.getLogger(__name__)

router = APIRouter()

# 默认配置文件路径（可通过环境变量覆盖）
DEFAULT_CONFIG_ENV = "MODSIM_DEFAULT_CONFIG"


class ConfigValidationResult(BaseModel):
    """配置验证结果"""
    valid: bool
    errors: List[str] = []
    warnings: List[str] = []


@router.get("/default", response_model=APIResponse)
async def get_default_config():
    """
    获取默认配置

    若设置了 MODSIM_DEFAULT_CONFIG 且文件存在则从YAML加载，否则返回内置默认值；
    文件内容无法解析或无效时返回 success=False 及错误信息
    """
    config_path = os.environ.get(DEFAULT_CONFIG_ENV)
    if config_path and os.path.exists(config_path):
        try:
            config = load_simulation_config(config_path)
        except (yaml.YAMLError, ValidationError, TypeError) as e:
            logger.warning(f"Default config {config_path} could not be loaded: {e}")
            return APIResponse(
                success=False,
                message=f"默认配置文件{config_path}无效: {e}",
                data=None
            )
        message = f"从{config_path}加载默认配置"
    else:
        config = SimulationConfig()
        message = "获取默认配置成功"

    return APIResponse(
        success=True,
        message=message,
        data=config.model_dump(mode="json")
    )


@router.post("/validate", response_model=APIResponse)
async def validate_config(
    config: Dict[str, Any],
    registry: ModuleRegistry = Depends(get_registry)
):
    """
    验证配置有效性

    接收原始字典以便把字段错误也作为验证结果返回，而不是422
    """
    valid, errors, warnings = validate_simulation_config(config, registry)
    result = ConfigValidationResult(valid=valid, errors=errors, warnings=warnings)
    return APIResponse(
        success=True,
        message="配置有效" if valid else "配置无效",
        data=result.model_dump()
    )
