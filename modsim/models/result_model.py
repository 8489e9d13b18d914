"""
仿真结果模型
定义一次仿真运行的结果数据结构

模型:
- RunResult: 运行结果汇总
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from modsim.models.enums import SchedulerState, SimulationStatus, TimeUnit


class RunResult(BaseModel):
    """
    仿真运行结果

    Attributes:
        sim_id: 仿真ID
        status: 仿真状态
        final_state: 调度器终止前所处状态（DRAINED/TIME_LIMIT_REACHED）
        start_time: 开始时间
        end_time: 结束时间
        final_clock: 最终仿真时钟
        time_unit: 时间单位
        module_order: 模块激活顺序
        events_dispatched: 已分派事件数
        events_dropped: 因超过结束时间而未执行的事件数
        unknown_event_count: 未定义事件类型警告次数
        event_type_counts: 各事件类型分派次数
        error_message: 失败原因
    """

    sim_id: str = Field(description="仿真ID")
    status: SimulationStatus = Field(description="仿真状态")
    final_state: SchedulerState = Field(description="调度器终止状态")
    start_time: float = Field(description="开始时间")
    end_time: float = Field(description="结束时间")
    final_clock: float = Field(description="最终仿真时钟")
    time_unit: TimeUnit = Field(default=TimeUnit.YEAR, description="时间单位")
    module_order: List[str] = Field(default=[], description="模块激活顺序")
    events_dispatched: int = Field(default=0, description="已分派事件数")
    events_dropped: int = Field(default=0, description="未执行事件数")
    unknown_event_count: int = Field(default=0, description="未定义事件类型次数")
    event_type_counts: Dict[str, int] = Field(default={}, description="事件类型计数")
    error_message: Optional[str] = Field(default=None, description="失败原因")
    created_at: str = Field(description="创建时间")
    completed_at: Optional[str] = Field(default=None, description="完成时间")

    @property
    def formatted_clock(self) -> str:
        """最终时钟的显示字符串"""
        from modsim.utils.time_converter import format_sim_time

        return format_sim_time(self.final_clock, self.time_unit)

    def is_successful(self) -> bool:
        """是否正常完成"""
        return self.status == SimulationStatus.COMPLETED
