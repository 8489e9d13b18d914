"""
配置文件读写
从YAML文件加载仿真配置
"""

import os
from typing import Union

import yaml

from modsim.models.config_model import SimulationConfig


def load_simulation_config(path: Union[str, os.PathLike]) -> SimulationConfig:
    """
    从YAML文件加载仿真配置

    Args:
        path: 配置文件路径

    Returns:
        仿真配置

    Raises:
        FileNotFoundError: 文件不存在
        pydantic.ValidationError: 配置内容无效
    """
    with open(path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}
    return SimulationConfig(**config_data)


def dump_simulation_config(config: SimulationConfig, path: Union[str, os.PathLike]):
    """
    将仿真配置写入YAML文件

    Args:
        config: 仿真配置
        path: 目标路径
    """
    data = config.model_dump(mode="json", exclude={"duration"})
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)
