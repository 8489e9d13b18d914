"""
事件收集器
记录仿真过程中已分派的事件

功能:
- 按分派顺序记录事件
- 记录未定义事件类型的警告
- 事件筛选和查询
- 统计汇总
"""

from typing import Any, Dict, List, Optional

from modsim.models.event_model import Event


class EventCollector:
    """
    事件收集器

    收集调度器分派过的所有事件，提供查询和统计功能
    """

    def __init__(self):
        """初始化事件收集器"""
        self.events: List[Event] = []
        self.unknown_events: List[Event] = []

    def add_event(self, event: Event):
        """
        记录已分派事件

        Args:
            event: 已分派事件
        """
        self.events.append(event)

    def add_unknown_event(self, event: Event):
        """记录没有处理分支的事件"""
        self.unknown_events.append(event)

    def get_all_events(self) -> List[Event]:
        """获取所有事件（分派顺序）"""
        return list(self.events)

    def get_events_in_range(
        self,
        start_time: float,
        end_time: float
    ) -> List[Event]:
        """
        获取指定时间范围内的事件（闭区间）

        Args:
            start_time: 开始时间
            end_time: 结束时间

        Returns:
            范围内的事件列表
        """
        return [e for e in self.events if start_time <= e.time <= end_time]

    def get_events_by_module(self, module_name: str) -> List[Event]:
        """
        获取指定模块的事件

        Args:
            module_name: 模块名称

        Returns:
            该模块的所有事件
        """
        return [e for e in self.events if e.module_name == module_name]

    def get_events_by_type(self, event_type: str) -> List[Event]:
        """
        获取指定类型的事件

        Args:
            event_type: 事件类型

        Returns:
            该类型的所有事件
        """
        return [e for e in self.events if e.event_type == event_type]

    def get_module_names(self) -> List[str]:
        """获取有事件记录的模块（按首次分派顺序）"""
        names: List[str] = []
        for e in self.events:
            if e.module_name not in names:
                names.append(e.module_name)
        return names

    def get_event_count(self) -> int:
        """获取事件总数"""
        return len(self.events)

    def get_event_type_counts(self) -> Dict[str, int]:
        """
        获取各类型事件数量统计

        Returns:
            事件类型 -> 数量 映射
        """
        counts: Dict[str, int] = {}
        for e in self.events:
            counts[e.event_type] = counts.get(e.event_type, 0) + 1
        return counts

    def get_module_counts(self) -> Dict[str, int]:
        """获取各模块事件数量统计"""
        counts: Dict[str, int] = {}
        for e in self.events:
            counts[e.module_name] = counts.get(e.module_name, 0) + 1
        return counts

    def get_last_time(self) -> Optional[float]:
        """最后一个已分派事件的时间"""
        return self.events[-1].time if self.events else None

    def get_events_for_display(
        self,
        module_name: Optional[str] = None,
        event_type: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        获取用于显示的事件数据

        Args:
            module_name: 模块筛选
            event_type: 事件类型筛选

        Returns:
            格式化的事件列表
        """
        filtered = self.events
        if module_name is not None:
            filtered = [e for e in filtered if e.module_name == module_name]
        if event_type is not None:
            filtered = [e for e in filtered if e.event_type == event_type]
        return [e.to_display_dict() for e in filtered]

    def clear(self):
        """清空所有事件"""
        self.events = []
        self.unknown_events = []

    def get_summary(self) -> Dict[str, Any]:
        """
        获取事件汇总

        Returns:
            汇总信息字典
        """
        return {
            "total_events": len(self.events),
            "unknown_events": len(self.unknown_events),
            "event_type_counts": self.get_event_type_counts(),
            "module_counts": self.get_module_counts(),
            "last_time": self.get_last_time(),
        }
