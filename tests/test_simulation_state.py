"""
仿真状态单元测试
测试SimulationState的核心功能

测试内容:
- 共享对象读写
- 参数解析顺序
- 时钟推进
- 事件安排
"""

import pytest

from modsim.core.errors import (
    CausalityViolationError,
    ClockRegressionError,
    UndefinedObjectError,
    UndefinedParameterError,
    UnknownModuleError,
)
from modsim.core.event_queue import EventQueue
from modsim.core.simulation_state import SimulationState
from modsim.models.config_model import SimulationConfig
from modsim.models.module_model import ModuleDescriptor


def create_state(
    parameters: dict = None,
    global_params: dict = None,
    per_module_params: dict = None,
    start_time: float = 0.0,
    random_seed: int = None
) -> SimulationState:
    """辅助函数：创建只含fire模块的仿真状态"""
    descriptors = {
        "fire": ModuleDescriptor(name="fire", parameters=parameters or {}),
        "caribou": ModuleDescriptor(name="caribou", parameters={"N": 100}),
    }
    config = SimulationConfig(
        modules=["fire", "caribou"],
        start_time=start_time,
        end_time=start_time + 10,
        global_params=global_params or {},
        per_module_params=per_module_params or {},
        random_seed=random_seed,
    )
    return SimulationState(descriptors, config)


def attach_queue(state: SimulationState) -> EventQueue:
    """辅助函数：为状态绑定事件队列"""
    queue = EventQueue(clock=lambda: state.clock)
    state.attach_queue(queue)
    return queue


class TestObjects:
    """共享对象测试"""

    def test_get_missing_raises(self):
        """测试读取不存在的对象"""
        state = create_state()

        with pytest.raises(UndefinedObjectError) as exc_info:
            state.get("landscape")
        assert exc_info.value.object_name == "landscape"
        assert isinstance(exc_info.value, LookupError)

    def test_get_with_default(self):
        """测试带默认值读取"""
        state = create_state()

        assert state.get("landscape", None) is None

    def test_set_and_overwrite(self):
        """测试写入与覆盖"""
        state = create_state()
        state.set("landscape", [1, 2, 3])
        state["landscape"] = [4]

        assert state.get("landscape") == [4]
        assert "landscape" in state
        assert state.object_names() == ["landscape"]

    def test_delete(self):
        """测试删除对象"""
        state = create_state()
        state.set("x", 1)
        state.delete("x")

        assert not state.has("x")
        with pytest.raises(UndefinedObjectError):
            state.delete("x")

    def test_objects_view_read_only(self):
        """测试对象视图只读"""
        state = create_state()
        state.set("x", 1)

        with pytest.raises(TypeError):
            state.objects["x"] = 2


class TestParams:
    """参数解析测试"""

    def test_default_value(self):
        """测试模块默认值"""
        state = create_state(parameters={"nFires": 5})

        assert state.get_param("fire", "nFires") == 5

    def test_global_override(self):
        """测试全局覆盖优先于默认值"""
        state = create_state(parameters={"nFires": 5}, global_params={"nFires": 8})

        assert state.get_param("fire", "nFires") == 8

    def test_module_override_wins(self):
        """测试模块级覆盖优先于全局覆盖"""
        state = create_state(
            parameters={"nFires": 5},
            global_params={"nFires": 8},
            per_module_params={"fire": {"nFires": 10}},
        )

        assert state.get_param("fire", "nFires") == 10
        assert state.get_param("caribou", "N") == 100

    def test_undefined_param_raises(self):
        """测试无覆盖且无默认值的参数"""
        state = create_state(parameters={"nFires": 5})

        with pytest.raises(UndefinedParameterError) as exc_info:
            state.get_param("fire", "spreadProb")
        assert exc_info.value.module_name == "fire"
        assert exc_info.value.param_name == "spreadProb"

    def test_get_params(self):
        """测试获取模块有效参数"""
        state = create_state(
            parameters={"nFires": 5, "spreadProb": 0.2},
            global_params={"spreadProb": 0.3},
            per_module_params={"fire": {"nFires": 10}},
        )

        assert state.get_params("fire") == {"nFires": 10, "spreadProb": 0.3}

    def test_params_read_only(self):
        """测试参数表只读"""
        state = create_state(parameters={"nFires": 5})

        assert state.params[("fire", "nFires")] == 5
        with pytest.raises(TypeError):
            state.params[("fire", "nFires")] = 6


class TestClock:
    """时钟测试"""

    def test_clock_starts_at_start_time(self):
        """测试时钟初始值"""
        state = create_state(start_time=2.5)

        assert state.clock == 2.5

    def test_advance(self):
        """测试推进时钟"""
        state = create_state()
        state.advance_clock_to(1.5)
        state.advance_clock_to(1.5)

        assert state.clock == 1.5

    def test_regression_raises(self):
        """测试时钟倒退"""
        state = create_state()
        state.advance_clock_to(3.0)

        with pytest.raises(ClockRegressionError) as exc_info:
            state.advance_clock_to(2.0)
        assert exc_info.value.attempted_time == 2.0
        assert state.clock == 3.0


class TestSchedule:
    """事件安排测试"""

    def test_schedule_without_queue(self):
        """测试未绑定队列时安排事件"""
        state = create_state()

        with pytest.raises(RuntimeError):
            state.schedule(1.0, "burn", module_name="fire")

    def test_schedule(self):
        """测试安排事件"""
        state = create_state()
        queue = attach_queue(state)
        event = state.schedule(2.0, "burn", module_name="fire", payload={"n": 3})

        assert len(queue) == 1
        assert queue.peek_min() == event
        assert event.payload == {"n": 3}

    def test_schedule_in(self):
        """测试相对时间安排"""
        state = create_state()
        attach_queue(state)
        state.advance_clock_to(1.0)
        event = state.schedule_in(0.5, "burn", module_name="fire")

        assert event.time == 1.5

    def test_schedule_unknown_module(self):
        """测试安排给不存在的模块"""
        state = create_state()
        attach_queue(state)

        with pytest.raises(UnknownModuleError):
            state.schedule(1.0, "graze", module_name="wolves")

    def test_schedule_into_past(self):
        """测试安排到过去"""
        state = create_state()
        attach_queue(state)
        state.advance_clock_to(4.0)

        with pytest.raises(CausalityViolationError):
            state.schedule(3.0, "burn", module_name="fire")

    def test_schedule_requires_module_outside_handler(self):
        """测试处理器外安排事件必须指定模块"""
        state = create_state()
        attach_queue(state)

        with pytest.raises(ValueError):
            state.schedule(1.0, "burn")

    def test_schedule_nan_rejected(self):
        """测试安排到NaN时间"""
        state = create_state()
        queue = attach_queue(state)

        with pytest.raises(ValueError):
            state.schedule(float("nan"), "burn", module_name="fire")
        with pytest.raises(ValueError):
            state.schedule_in(float("nan"), "burn", module_name="fire")
        assert queue.is_empty()
        assert state.clock == 0.0


class TestRandomState:
    """随机数测试"""

    def test_same_seed_same_stream(self):
        """测试相同种子产生相同随机序列"""
        a = create_state(random_seed=42)
        b = create_state(random_seed=42)

        assert a.rng.random(5).tolist() == b.rng.random(5).tolist()
