"""
异常定义
调度核心的错误分类

分类:
- 配置错误（ConfigurationError）: 运行前检测，致命，不会构造出部分初始化的仿真
- 因果错误（CausalityError）: 处理器中的编程错误，立即中止运行
- 查找错误（UndefinedObjectError等）: 传播到调用处理器的上下文并中止运行
- 分派警告（UnknownEventTypeError）: 由调度器捕获并记录，循环继续
"""

from typing import Iterable, List, Optional


class ModSimError(Exception):
    """所有调度核心异常的基类"""


# ============ 配置错误 ============

class ConfigurationError(ModSimError):
    """配置错误基类"""


class DuplicateModuleNameError(ConfigurationError):
    """重复注册同名模块"""

    def __init__(self, module_name: str):
        self.module_name = module_name
        super().__init__(f"模块'{module_name}'已注册，不允许重复注册")


class UnknownModuleError(ConfigurationError):
    """引用了未注册的模块"""

    def __init__(self, module_names: Iterable[str], context: str = ""):
        self.module_names: List[str] = list(module_names)
        names = ", ".join(f"'{n}'" for n in self.module_names)
        message = f"未注册的模块: {names}"
        if context:
            message = f"{context}: {message}"
        super().__init__(message)


class CyclicDependencyError(ConfigurationError):
    """模块依赖图存在环"""

    def __init__(self, cycle: Iterable[str], objects: Optional[Iterable[str]] = None):
        self.cycle: List[str] = list(cycle)
        self.objects: List[str] = list(objects or [])
        path = " -> ".join(self.cycle + self.cycle[:1])
        message = f"模块依赖存在循环: {path}"
        if self.objects:
            message += f"（涉及对象: {', '.join(self.objects)}）"
        super().__init__(message)


class MissingInitHandlerError(ConfigurationError):
    """模块未提供init事件处理"""

    def __init__(self, module_name: str):
        self.module_name = module_name
        super().__init__(f"模块'{module_name}'必须处理'init'事件")


class InvalidConfigError(ConfigurationError):
    """仿真配置无效"""

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__("仿真配置无效: " + "; ".join(self.errors))


class SimulationAlreadyRunError(ModSimError):
    """同一仿真只允许运行一次"""

    def __init__(self, sim_id: str):
        self.sim_id = sim_id
        super().__init__(f"仿真'{sim_id}'已运行过，重新运行请重新调用init_simulation")


# ============ 因果错误 ============

class CausalityError(ModSimError):
    """因果错误基类"""


class CausalityViolationError(CausalityError):
    """事件被安排在当前时钟之前"""

    def __init__(
        self,
        attempted_time: float,
        clock: float,
        module_name: str,
        event_type: str,
        scheduled_by: Optional[str] = None
    ):
        self.attempted_time = attempted_time
        self.clock = clock
        self.module_name = module_name
        self.event_type = event_type
        self.scheduled_by = scheduled_by
        message = (
            f"不能将事件{module_name}.{event_type}安排在时间{attempted_time:g}，"
            f"早于当前时钟{clock:g}"
        )
        if scheduled_by:
            message += f"（由{scheduled_by}处理时安排）"
        super().__init__(message)


class ClockRegressionError(CausalityError):
    """仿真时钟倒退"""

    def __init__(self, attempted_time: float, clock: float):
        self.attempted_time = attempted_time
        self.clock = clock
        super().__init__(f"仿真时钟不能从{clock:g}倒退到{attempted_time:g}")


# ============ 查找错误 ============

class UndefinedObjectError(ModSimError, LookupError):
    """仿真状态中不存在该对象"""

    def __init__(self, object_name: str, requested_by: Optional[str] = None):
        self.object_name = object_name
        self.requested_by = requested_by
        message = f"仿真状态中不存在对象'{object_name}'"
        if requested_by:
            message += f"（请求模块: {requested_by}）"
        super().__init__(message)


class UndefinedParameterError(ModSimError, LookupError):
    """参数既无覆盖值也无模块默认值"""

    def __init__(self, module_name: str, param_name: str):
        self.module_name = module_name
        self.param_name = param_name
        super().__init__(
            f"模块'{module_name}'的参数'{param_name}'未定义（无覆盖值且无默认值）"
        )


# ============ 队列与分派 ============

class EmptyQueueError(ModSimError):
    """事件队列为空"""

    def __init__(self, operation: str = "pop_min"):
        self.operation = operation
        super().__init__(f"事件队列为空，无法执行{operation}")


class UnknownEventTypeError(ModSimError):
    """模块没有对应事件类型的处理分支（可恢复，仅记录警告）"""

    def __init__(self, module_name: str, event_type: str):
        self.module_name = module_name
        self.event_type = event_type
        super().__init__(f"模块'{module_name}'未定义事件类型'{event_type}'")
