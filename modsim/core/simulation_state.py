"""
仿真状态
所有模块共享的可变状态容器（模块间数据总线）

功能:
- 仿真时钟（只由调度器推进，单调不减）
- 共享对象存储（任意模块可读写，后写覆盖）
- 参数表（运行级覆盖 → 模块默认值，初始化后只读）
- 处理器内安排后续事件
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import numpy as np

from modsim.core.errors import (
    ClockRegressionError,
    UndefinedObjectError,
    UndefinedParameterError,
    UnknownModuleError,
)
from modsim.core.event_queue import EventQueue
from modsim.models.config_model import SimulationConfig
from modsim.models.enums import TimeUnit
from modsim.models.event_model import Event
from modsim.models.module_model import ModuleDescriptor

logger = logging.getLogger(__name__)

_MISSING = object()


class SimulationState:
    """
    仿真共享状态

    以显式对象的形式传给每次处理器调用，不使用全局变量。
    单线程执行，无需加锁；同一时刻的读写顺序完全由事件插入顺序决定
    """

    def __init__(
        self,
        descriptors: Mapping[str, ModuleDescriptor],
        config: SimulationConfig
    ):
        """
        初始化仿真状态

        Args:
            descriptors: 参与仿真的模块描述（模块名 -> 描述）
            config: 仿真配置（提供起止时间、参数覆盖和随机种子）
        """
        self.start_time: float = config.start_time
        self.end_time: float = config.end_time
        self.time_unit: TimeUnit = config.time_unit
        self.random_seed: Optional[int] = config.random_seed

        self._clock: float = config.start_time
        self._objects: Dict[str, Any] = {}
        self._descriptors: Dict[str, ModuleDescriptor] = dict(descriptors)

        # 参数在初始化时合并，之后只读
        self._defaults = MappingProxyType({
            name: MappingProxyType(dict(d.parameters))
            for name, d in self._descriptors.items()
        })
        self._global_overrides = MappingProxyType(dict(config.global_params))
        self._module_overrides = MappingProxyType({
            name: MappingProxyType(dict(values))
            for name, values in config.per_module_params.items()
        })

        self.rng: np.random.Generator = np.random.default_rng(config.random_seed)
        self.current_event: Optional[Event] = None
        self._queue: Optional[EventQueue] = None

    # ============ 时钟 ============

    @property
    def clock(self) -> float:
        """当前仿真时间"""
        return self._clock

    def advance_clock_to(self, time: float):
        """
        推进仿真时钟（仅由调度器调用）

        Args:
            time: 新时钟值

        Raises:
            ClockRegressionError: 新时钟小于当前时钟
        """
        if time < self._clock:
            raise ClockRegressionError(attempted_time=time, clock=self._clock)
        self._clock = time

    # ============ 共享对象 ============

    def get(self, name: str, default: Any = _MISSING) -> Any:
        """
        读取共享对象

        Args:
            name: 对象名称
            default: 不存在时的返回值；不提供则抛出异常

        Raises:
            UndefinedObjectError: 对象不存在且未提供默认值
        """
        if name in self._objects:
            return self._objects[name]
        if default is not _MISSING:
            return default
        raise UndefinedObjectError(name, requested_by=self.current_module)

    def set(self, name: str, value: Any):
        """写入共享对象（无条件覆盖）"""
        self._objects[name] = value

    def has(self, name: str) -> bool:
        """对象是否存在"""
        return name in self._objects

    def delete(self, name: str):
        """
        删除共享对象

        Raises:
            UndefinedObjectError: 对象不存在
        """
        if name not in self._objects:
            raise UndefinedObjectError(name, requested_by=self.current_module)
        del self._objects[name]

    def object_names(self) -> List[str]:
        """获取所有对象名称"""
        return list(self._objects.keys())

    @property
    def objects(self) -> Mapping[str, Any]:
        """共享对象的只读视图"""
        return MappingProxyType(self._objects)

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __setitem__(self, name: str, value: Any):
        self.set(name, value)

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._objects))

    # ============ 参数 ============

    def get_param(self, module_name: str, param_name: str) -> Any:
        """
        获取模块参数

        解析顺序: 模块级覆盖 → 全局覆盖 → 模块默认值

        Args:
            module_name: 模块名称
            param_name: 参数名称

        Raises:
            UndefinedParameterError: 三处均未定义
        """
        overrides = self._module_overrides.get(module_name, {})
        if param_name in overrides:
            return overrides[param_name]
        if param_name in self._global_overrides:
            return self._global_overrides[param_name]
        defaults = self._defaults.get(module_name, {})
        if param_name in defaults:
            return defaults[param_name]
        raise UndefinedParameterError(module_name, param_name)

    def get_params(self, module_name: str) -> Dict[str, Any]:
        """
        获取模块的全部有效参数

        全局覆盖只作用于模块声明过的参数

        Args:
            module_name: 模块名称

        Returns:
            参数名 -> 有效值
        """
        defaults = self._defaults.get(module_name, {})
        overrides = self._module_overrides.get(module_name, {})
        names = list(defaults.keys()) + [n for n in overrides if n not in defaults]
        return {name: self.get_param(module_name, name) for name in names}

    @property
    def params(self) -> Mapping[Tuple[str, str], Any]:
        """全部模块有效参数的只读视图，键为 (模块名, 参数名)"""
        return MappingProxyType({
            (module_name, param_name): value
            for module_name in self._descriptors
            for param_name, value in self.get_params(module_name).items()
        })

    # ============ 事件安排 ============

    def attach_queue(self, queue: EventQueue):
        """绑定调度器的事件队列"""
        self._queue = queue

    @property
    def current_module(self) -> Optional[str]:
        """当前正在处理事件的模块"""
        return self.current_event.module_name if self.current_event else None

    @property
    def module_names(self) -> List[str]:
        """参与仿真的模块名称"""
        return list(self._descriptors.keys())

    def schedule(
        self,
        time: float,
        event_type: str,
        module_name: Optional[str] = None,
        payload: Any = None
    ) -> Event:
        """
        安排事件

        Args:
            time: 触发时间（不得早于当前时钟）
            event_type: 事件类型
            module_name: 目标模块，默认为当前处理事件的模块
            payload: 附加数据

        Returns:
            已入队的事件

        Raises:
            CausalityViolationError: 时间早于当前时钟
            UnknownModuleError: 目标模块不在本次仿真中
            pydantic.ValidationError: 时间不是有限值（NaN或无穷大）
        """
        if self._queue is None:
            raise RuntimeError("仿真状态尚未绑定事件队列")

        target = module_name or self.current_module
        if target is None:
            raise ValueError("不在事件处理中时必须指定module_name")
        if target not in self._descriptors:
            raise UnknownModuleError([target], context="安排事件")

        event = Event(time=time, module_name=target, event_type=event_type, payload=payload)
        scheduled_by = str(self.current_event) if self.current_event else None
        queued = self._queue.insert(event, scheduled_by=scheduled_by)
        logger.debug(f"Scheduled {queued} (by {scheduled_by or 'host'})")
        return queued

    def schedule_in(
        self,
        delay: float,
        event_type: str,
        module_name: Optional[str] = None,
        payload: Any = None
    ) -> Event:
        """在当前时钟之后 delay 时间安排事件"""
        return self.schedule(self._clock + delay, event_type, module_name, payload)

    def __repr__(self) -> str:
        return (
            f"SimulationState(clock={self._clock:g}, "
            f"objects={len(self._objects)}, modules={len(self._descriptors)})"
        )
