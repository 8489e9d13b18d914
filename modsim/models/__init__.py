"""
数据模型包
包含系统中使用的所有Pydantic数据模型

模块说明:
- enums.py: 枚举定义（SchedulerState, TimeUnit等）
- event_model.py: 调度事件模型
- module_model.py: 模块描述模型
- config_model.py: 仿真配置模型
- result_model.py: 仿真结果模型
"""

from modsim.models.enums import (
    INIT_EVENT,
    SchedulerState,
    SimulationStatus,
    TimeUnit,
    TIME_UNIT_SECONDS,
)
from modsim.models.event_model import Event
from modsim.models.module_model import ObjectSpec, ModuleDescriptor
from modsim.models.config_model import SimulationConfig
from modsim.models.result_model import RunResult

__all__ = [
    # 枚举
    "INIT_EVENT",
    "SchedulerState",
    "SimulationStatus",
    "TimeUnit",
    "TIME_UNIT_SECONDS",
    # 事件
    "Event",
    # 模块
    "ObjectSpec",
    "ModuleDescriptor",
    # 配置
    "SimulationConfig",
    # 结果
    "RunResult",
]
