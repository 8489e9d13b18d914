"""
事件收集器单元测试
测试EventCollector的查询与统计功能
"""

from modsim.core.event_collector import EventCollector
from modsim.models.event_model import Event


def create_collector() -> EventCollector:
    """辅助函数：创建含fire/caribou事件的收集器"""
    collector = EventCollector()
    for seq, (time, module_name, event_type) in enumerate([
        (0.0, "fire", "init"),
        (0.0, "caribou", "init"),
        (1.0, "fire", "burn"),
        (1.5, "caribou", "graze"),
        (2.0, "fire", "burn"),
    ]):
        collector.add_event(
            Event(time=time, module_name=module_name, event_type=event_type, sequence=seq)
        )
    collector.add_unknown_event(Event(time=1.2, module_name="fire", event_type="smoke"))
    return collector


class TestQueries:
    """查询测试"""

    def test_filters(self):
        """测试按模块、类型、时间筛选"""
        collector = create_collector()

        assert len(collector.get_events_by_module("fire")) == 3
        assert [e.time for e in collector.get_events_by_type("burn")] == [1.0, 2.0]
        assert [e.event_type for e in collector.get_events_in_range(1.0, 1.5)] == ["burn", "graze"]

    def test_module_names_first_dispatch_order(self):
        """测试模块名按首次分派顺序排列"""
        collector = create_collector()

        assert collector.get_module_names() == ["fire", "caribou"]

    def test_events_for_display(self):
        """测试显示数据筛选"""
        collector = create_collector()

        rows = collector.get_events_for_display(module_name="fire", event_type="burn")
        assert rows == [
            {"time": 1.0, "module_name": "fire", "event_type": "burn", "sequence": 2},
            {"time": 2.0, "module_name": "fire", "event_type": "burn", "sequence": 4},
        ]
        assert len(collector.get_events_for_display()) == 5


class TestSummary:
    """统计测试"""

    def test_summary(self):
        """测试汇总信息"""
        summary = create_collector().get_summary()

        assert summary["total_events"] == 5
        assert summary["unknown_events"] == 1
        assert summary["event_type_counts"] == {"init": 2, "burn": 2, "graze": 1}
        assert summary["module_counts"] == {"fire": 3, "caribou": 2}
        assert summary["last_time"] == 2.0

    def test_clear(self):
        """测试清空"""
        collector = create_collector()
        collector.clear()

        assert collector.get_event_count() == 0
        assert collector.unknown_events == []
        assert collector.get_last_time() is None
