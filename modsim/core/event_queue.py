"""
事件队列
按 (time, sequence) 排序的优先队列

功能:
- 插入事件并分配插入序号（O(log n)）
- 弹出/查看最早事件（同时刻按插入顺序先进先出）
- 因果检查：不允许把事件安排到当前时钟之前
"""

import heapq
import itertools
from typing import Callable, List, Optional, Tuple

from modsim.core.errors import CausalityViolationError, EmptyQueueError
from modsim.models.event_model import Event


class EventQueue:
    """
    事件优先队列

    堆中保存 (time, sequence, event) 三元组，sequence 单调递增，
    因此相同时间的事件严格按插入顺序出队，保证仿真可重复
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """
        初始化事件队列

        Args:
            clock: 返回当前仿真时钟的函数，用于因果检查；None表示不检查
        """
        self._heap: List[Tuple[float, int, Event]] = []
        self._counter = itertools.count()
        self._clock = clock

    def insert(self, event: Event, scheduled_by: Optional[str] = None) -> Event:
        """
        插入事件

        Args:
            event: 待插入事件（sequence字段将被忽略并重新分配）
            scheduled_by: 安排该事件的上下文（用于错误信息）

        Returns:
            带插入序号的新事件

        Raises:
            CausalityViolationError: 事件时间早于当前时钟
        """
        if self._clock is not None:
            now = self._clock()
            if event.time < now:
                raise CausalityViolationError(
                    attempted_time=event.time,
                    clock=now,
                    module_name=event.module_name,
                    event_type=event.event_type,
                    scheduled_by=scheduled_by,
                )

        sequenced = event.with_sequence(next(self._counter))
        heapq.heappush(self._heap, (sequenced.time, sequenced.sequence, sequenced))
        return sequenced

    def pop_min(self) -> Event:
        """
        弹出最早事件

        Raises:
            EmptyQueueError: 队列为空
        """
        if not self._heap:
            raise EmptyQueueError("pop_min")
        return heapq.heappop(self._heap)[2]

    def peek_min(self) -> Event:
        """
        查看最早事件（不移除）

        Raises:
            EmptyQueueError: 队列为空
        """
        if not self._heap:
            raise EmptyQueueError("peek_min")
        return self._heap[0][2]

    def is_empty(self) -> bool:
        """队列是否为空"""
        return not self._heap

    def snapshot(self) -> List[Event]:
        """获取按出队顺序排列的待处理事件列表（只读副本）"""
        return [entry[2] for entry in sorted(self._heap)]

    def clear(self) -> int:
        """
        清空队列

        Returns:
            被丢弃的事件数
        """
        dropped = len(self._heap)
        self._heap = []
        return dropped

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
