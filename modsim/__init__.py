"""
modsim
离散事件模块调度器：事件队列、模块依赖解析与共享仿真状态

典型用法:
    from modsim import ModuleDescriptor, register_module, init_simulation, run

    register_module(ModuleDescriptor(name="producer", outputs=["r"]), {"init": init_producer})
    sim = init_simulation({"modules": ["producer"], "start_time": 0, "end_time": 10})
    result = run(sim)
"""

__version__ = "1.0.0"

from modsim.models import (
    INIT_EVENT,
    Event,
    ModuleDescriptor,
    ObjectSpec,
    RunResult,
    SchedulerState,
    SimulationConfig,
    SimulationStatus,
    TimeUnit,
)
from modsim.core import (
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
    EventQueue,
    SimulationState,
    ModuleRegistry,
    Simulation,
    default_registry,
    register_module,
    init_simulation,
    run,
    inspect_dependency_graph,
)

__all__ = [
    "__version__",
    # 模型
    "INIT_EVENT",
    "Event",
    "ModuleDescriptor",
    "ObjectSpec",
    "RunResult",
    "SchedulerState",
    "SimulationConfig",
    "SimulationStatus",
    "TimeUnit",
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
    # 核心
    "EventQueue",
    "SimulationState",
    "ModuleRegistry",
    "Simulation",
    "default_registry",
    "register_module",
    "init_simulation",
    "run",
    "inspect_dependency_graph",
]
