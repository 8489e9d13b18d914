"""
调度核心包
包含离散事件调度器与模块组合的核心组件

模块说明:
- errors.py: 异常分类
- event_queue.py: 事件优先队列（heapq）
- simulation_state.py: 共享仿真状态
- module_runtime.py: 模块分派包装
- module_registry.py: 模块注册与依赖解析（NetworkX）
- scheduler.py: 主循环
- event_collector.py: 已分派事件收集器
- simulation.py: 仿真句柄与库接口
"""

from modsim.core.errors import (
    ModSimError,
    ConfigurationError,
    DuplicateModuleNameError,
    UnknownModuleError,
    CyclicDependencyError,
    MissingInitHandlerError,
    InvalidConfigError,
    SimulationAlreadyRunError,
    CausalityError,
    CausalityViolationError,
    ClockRegressionError,
    UndefinedObjectError,
    UndefinedParameterError,
    EmptyQueueError,
    UnknownEventTypeError,
)
from modsim.core.event_queue import EventQueue
from modsim.core.simulation_state import SimulationState
from modsim.core.module_runtime import ModuleRuntime
from modsim.core.module_registry import ModuleRegistry, graph_to_dict
from modsim.core.scheduler import Scheduler
from modsim.core.event_collector import EventCollector
from modsim.core.simulation import (
    Simulation,
    default_registry,
    register_module,
    init_simulation,
    run,
    inspect_dependency_graph,
)

__all__ = [
    # 异常
    "ModSimError",
    "ConfigurationError",
    "DuplicateModuleNameError",
    "UnknownModuleError",
    "CyclicDependencyError",
    "MissingInitHandlerError",
    "InvalidConfigError",
    "SimulationAlreadyRunError",
    "CausalityError",
    "CausalityViolationError",
    "ClockRegressionError",
    "UndefinedObjectError",
    "UndefinedParameterError",
    "EmptyQueueError",
    "UnknownEventTypeError",
    # 组件
    "EventQueue",
    "SimulationState",
    "ModuleRuntime",
    "ModuleRegistry",
    "graph_to_dict",
    "Scheduler",
    "EventCollector",
    # 接口
    "Simulation",
    "default_registry",
    "register_module",
    "init_simulation",
    "run",
    "inspect_dependency_graph",
]
