"""
调度器
离散事件仿真主循环

状态机:
    UNINITIALIZED → SEEDED → RUNNING → DRAINED | TIME_LIMIT_REACHED → FINISHED

设计要点:
- 单线程协作式执行，一个事件处理完成后才弹出下一个
- 时钟只在分派前由调度器推进
- 时间大于结束时间的事件被丢弃，不执行
- 未定义的事件类型记录警告后继续；其他异常原样向外传播
"""

import logging
from typing import Dict, List, Mapping

from modsim.core.errors import UnknownEventTypeError
from modsim.core.event_collector import EventCollector
from modsim.core.event_queue import EventQueue
from modsim.core.module_runtime import ModuleRuntime
from modsim.core.simulation_state import SimulationState
from modsim.models.enums import INIT_EVENT, SchedulerState
from modsim.models.event_model import Event

logger = logging.getLogger(__name__)


class Scheduler:
    """
    调度器

    拥有事件队列，驱动主循环，把事件分派给所属模块的运行时
    """

    def __init__(
        self,
        runtimes: Mapping[str, ModuleRuntime],
        state: SimulationState,
        collector: EventCollector
    ):
        """
        初始化调度器

        Args:
            runtimes: 模块名 -> 运行时
            state: 共享仿真状态
            collector: 事件收集器
        """
        self.runtimes: Dict[str, ModuleRuntime] = dict(runtimes)
        self.state = state
        self.collector = collector

        self.queue = EventQueue(clock=lambda: self.state.clock)
        self.state.attach_queue(self.queue)

        self.status = SchedulerState.UNINITIALIZED
        self.end_reason: SchedulerState = None
        self.events_dispatched = 0
        self.events_dropped = 0
        self.unknown_event_count = 0

    def seed(self, order: List[str]):
        """
        为每个模块安排init事件

        所有init事件时间相同，插入顺序即解析顺序，
        因此先解析的模块的init先执行

        Args:
            order: 模块激活顺序
        """
        if self.status != SchedulerState.UNINITIALIZED:
            raise RuntimeError(f"调度器状态为{self.status.value}，不能重复初始化")

        for module_name in order:
            self.queue.insert(
                Event(
                    time=self.state.start_time,
                    module_name=module_name,
                    event_type=INIT_EVENT,
                )
            )
        self.status = SchedulerState.SEEDED
        logger.debug(
            f"Seeded {len(order)} init events at t={self.state.start_time:g}: {order}"
        )

    def run(self) -> SchedulerState:
        """
        运行主循环直至队列清空或超过结束时间

        Returns:
            终止原因（DRAINED 或 TIME_LIMIT_REACHED）
        """
        if self.status != SchedulerState.SEEDED:
            raise RuntimeError(f"调度器状态为{self.status.value}，无法运行")

        self.status = SchedulerState.RUNNING
        end_time = self.state.end_time

        while True:
            if self.queue.is_empty():
                self.status = SchedulerState.DRAINED
                break

            event = self.queue.pop_min()
            if event.time > end_time:
                # 弹出的事件和队列中剩余事件都不会执行
                self.events_dropped = 1 + len(self.queue)
                self.status = SchedulerState.TIME_LIMIT_REACHED
                logger.debug(
                    f"Next event {event} is past end time {end_time:g}; "
                    f"dropping {self.events_dropped} events"
                )
                break

            self._dispatch(event)

        self.end_reason = self.status
        self.status = SchedulerState.FINISHED
        return self.end_reason

    def _dispatch(self, event: Event):
        """
        分派单个事件

        Args:
            event: 待分派事件
        """
        self.state.advance_clock_to(event.time)
        runtime = self.runtimes[event.module_name]
        self.state.current_event = event
        logger.debug(f"Dispatching {event}")

        try:
            runtime.dispatch(self.state, event.event_type)
        except UnknownEventTypeError as e:
            self.unknown_event_count += 1
            self.collector.add_unknown_event(event)
            logger.warning(f"Undefined event type at t={event.time:g}: {e}")
            return
        except Exception as e:
            logger.error(
                f"Handler {event} failed at t={self.state.clock:g}: "
                f"{type(e).__name__}: {e}"
            )
            raise
        finally:
            self.state.current_event = None

        self.events_dispatched += 1
        self.collector.add_event(event)

    def pending_events(self) -> List[Event]:
        """获取队列中尚未处理的事件"""
        return self.queue.snapshot()
