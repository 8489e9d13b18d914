"""
工具函数包
提供各种辅助功能

模块说明:
- time_converter.py: 时间单位换算与格式化
- log_config.py: 日志配置
- config_loader.py: YAML配置读写
- validators.py: 配置验证工具（依赖core，需直接导入）
"""

from modsim.utils.time_converter import (
    convert_time,
    format_sim_time,
    format_duration_short,
    get_time_range,
)

from modsim.utils.log_config import (
    LogConfig,
    setup_logging,
)

from modsim.utils.config_loader import (
    load_simulation_config,
    dump_simulation_config,
)

__all__ = [
    # 时间转换
    "convert_time",
    "format_sim_time",
    "format_duration_short",
    "get_time_range",
    # 日志
    "LogConfig",
    "setup_logging",
    # 配置
    "load_simulation_config",
    "dump_simulation_config",
]
