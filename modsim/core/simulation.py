"""
仿真句柄与库接口
组合注册表、仿真状态和调度器，对宿主程序暴露库级接口

接口:
- register_module: 注册模块
- init_simulation: 根据配置初始化仿真（解析依赖顺序并安排init事件）
- run: 运行仿真（每个仿真只能运行一次）
- inspect_dependency_graph: 只读依赖图查询
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

import networkx as nx
from pydantic import ValidationError

from modsim.core.errors import (
    InvalidConfigError,
    SimulationAlreadyRunError,
    UnknownModuleError,
)
from modsim.core.event_collector import EventCollector
from modsim.core.module_registry import ModuleRegistry
from modsim.core.module_runtime import Dispatch, ModuleRuntime
from modsim.core.scheduler import Scheduler
from modsim.core.simulation_state import SimulationState
from modsim.models.config_model import SimulationConfig
from modsim.models.enums import SchedulerState, SimulationStatus
from modsim.models.event_model import Event
from modsim.models.module_model import ModuleDescriptor
from modsim.models.result_model import RunResult
from modsim.utils.time_converter import format_sim_time

logger = logging.getLogger(__name__)

# 默认模块注册表（未显式传入registry时使用）
default_registry = ModuleRegistry()


class Simulation:
    """
    仿真句柄

    持有本次运行的共享状态、已安排init事件的调度器和依赖图快照。
    通过 init_simulation 创建；配置错误会在构造前抛出
    """

    def __init__(
        self,
        config: SimulationConfig,
        order: List[str],
        runtimes: Mapping[str, ModuleRuntime],
        graph: nx.DiGraph
    ):
        """
        初始化仿真句柄

        Args:
            config: 仿真配置
            order: 模块激活顺序
            runtimes: 模块名 -> 运行时
            graph: 依赖图
        """
        self.sim_id = str(uuid.uuid4())
        self.config = config
        self.order = list(order)
        self.created_at = datetime.now().isoformat()
        self.status = SimulationStatus.PENDING
        self.result: Optional[RunResult] = None

        self._graph = nx.freeze(graph.copy())
        descriptors = {name: runtimes[name].descriptor for name in self.order}

        self.state = SimulationState(descriptors, config)
        self.collector = EventCollector()
        self.scheduler = Scheduler(runtimes, self.state, self.collector)
        self.scheduler.seed(self.order)

    def run(self) -> RunResult:
        """
        运行仿真直至结束

        Returns:
            运行结果

        Raises:
            SimulationAlreadyRunError: 仿真已运行过
        """
        if self.status != SimulationStatus.PENDING:
            raise SimulationAlreadyRunError(self.sim_id)

        self.status = SimulationStatus.RUNNING
        logger.info(
            f"Simulation {self.sim_id} started: {len(self.order)} modules, "
            f"{format_sim_time(self.config.start_time, self.config.time_unit)} → "
            f"{format_sim_time(self.config.end_time, self.config.time_unit)}"
        )

        try:
            self.scheduler.run()
        except Exception as e:
            self.status = SimulationStatus.FAILED
            self.result = self._build_result(error_message=f"{type(e).__name__}: {e}")
            raise

        self.status = SimulationStatus.COMPLETED
        self.result = self._build_result()
        logger.info(
            f"Simulation {self.sim_id} finished ({self.result.final_state.value}) at "
            f"{self.result.formatted_clock}: {self.result.events_dispatched} events "
            f"dispatched, {self.result.events_dropped} dropped"
        )
        return self.result

    def _build_result(self, error_message: Optional[str] = None) -> RunResult:
        """收集运行结果"""
        scheduler = self.scheduler
        final_state = scheduler.end_reason or scheduler.status
        return RunResult(
            sim_id=self.sim_id,
            status=self.status,
            final_state=final_state,
            start_time=self.config.start_time,
            end_time=self.config.end_time,
            final_clock=self.state.clock,
            time_unit=self.config.time_unit,
            module_order=self.order,
            events_dispatched=scheduler.events_dispatched,
            events_dropped=scheduler.events_dropped,
            unknown_event_count=scheduler.unknown_event_count,
            event_type_counts=self.collector.get_event_type_counts(),
            error_message=error_message,
            created_at=self.created_at,
            completed_at=datetime.now().isoformat(),
        )

    @property
    def scheduler_state(self) -> SchedulerState:
        """调度器当前状态"""
        return self.scheduler.status

    @property
    def clock(self) -> float:
        """当前仿真时钟"""
        return self.state.clock

    def dependency_graph(self) -> nx.DiGraph:
        """获取依赖图（冻结，只读）"""
        return self._graph

    def completed_events(self) -> List[Event]:
        """获取已分派事件（分派顺序）"""
        return self.collector.get_all_events()

    def pending_events(self) -> List[Event]:
        """获取尚未处理的事件"""
        return self.scheduler.pending_events()

    def __repr__(self) -> str:
        return (
            f"Simulation(sim_id={self.sim_id!r}, status={self.status.value}, "
            f"modules={self.order})"
        )


# ============ 库级接口 ============

def register_module(
    descriptor: ModuleDescriptor,
    dispatch: Dispatch,
    registry: Optional[ModuleRegistry] = None
) -> ModuleRuntime:
    """
    注册模块

    Args:
        descriptor: 模块描述
        dispatch: 分派函数 (state, event_type) 或分派表 {event_type: handler(state)}
        registry: 注册表，None使用默认注册表

    Raises:
        DuplicateModuleNameError: 名称已注册
    """
    registry = registry if registry is not None else default_registry
    return registry.register(descriptor, dispatch)


def init_simulation(
    config: Union[SimulationConfig, Dict[str, Any]],
    registry: Optional[ModuleRegistry] = None
) -> Simulation:
    """
    初始化仿真

    Args:
        config: 仿真配置（模型或字典）；modules为空时使用注册表中的全部模块
        registry: 注册表，None使用默认注册表

    Returns:
        已安排init事件的仿真句柄

    Raises:
        UnknownModuleError: modules或per_module_params引用了未注册模块
        InvalidConfigError: 配置字段无效
        CyclicDependencyError: 所选模块的依赖图存在环
    """
    if not isinstance(config, SimulationConfig):
        try:
            config = SimulationConfig.model_validate(config)
        except ValidationError as e:
            raise InvalidConfigError(
                f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
                for err in e.errors()
            ) from e
    registry = registry if registry is not None else default_registry

    names = list(config.modules) or registry.names()
    order = registry.resolve_order(names)

    stray = [name for name in config.per_module_params if name not in names]
    if stray:
        raise UnknownModuleError(stray, context="per_module_params")

    for module_name, overrides in config.per_module_params.items():
        declared = registry.get_descriptor(module_name).parameters
        undeclared = [p for p in overrides if p not in declared]
        if undeclared:
            logger.warning(
                f"Module '{module_name}' does not declare parameters: "
                f"{', '.join(undeclared)}"
            )

    runtimes = {name: registry.get_runtime(name) for name in order}
    simulation = Simulation(config, order, runtimes, registry.dependency_graph(names))
    logger.info(f"Simulation {simulation.sim_id} initialised, activation order: {order}")
    return simulation


def run(simulation: Simulation) -> RunResult:
    """
    运行仿真（每个仿真只能运行一次）

    Raises:
        SimulationAlreadyRunError: 重复运行
    """
    return simulation.run()


def inspect_dependency_graph(simulation: Simulation) -> nx.DiGraph:
    """获取仿真的只读依赖图"""
    return simulation.dependency_graph()
