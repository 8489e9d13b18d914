"""
事件模型
定义调度队列中的单个事件

模型:
- Event: 不可变事件记录（时间、所属模块、事件类型、序号、附加数据）
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class Event(BaseModel):
    """
    调度事件模型

    事件一旦创建即不可修改，重新调度意味着插入一个新事件

    Attributes:
        time: 计划触发时间（仿真时间，允许小数）
        module_name: 所属模块名称
        event_type: 事件类型标签（"init"为保留类型）
        sequence: 插入序号（由队列在插入时分配，用于同时刻排序）
        payload: 可选附加数据
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    time: float = Field(
        allow_inf_nan=False,
        description="计划触发时间（仿真时间，必须是有限值）"
    )
    module_name: str = Field(
        min_length=1,
        description="所属模块名称"
    )
    event_type: str = Field(
        min_length=1,
        description="事件类型标签"
    )
    sequence: Optional[int] = Field(
        default=None,
        description="插入序号（队列分配）"
    )
    payload: Any = Field(
        default=None,
        description="附加数据"
    )

    def with_sequence(self, sequence: int) -> "Event":
        """
        返回带插入序号的新事件（原事件不变）

        Args:
            sequence: 插入序号

        Returns:
            新事件
        """
        return self.model_copy(update={"sequence": sequence})

    def to_display_dict(self) -> dict:
        """转换为显示用字典"""
        return {
            "time": self.time,
            "module_name": self.module_name,
            "event_type": self.event_type,
            "sequence": self.sequence,
        }

    def __str__(self) -> str:
        return f"{self.module_name}.{self.event_type}@{self.time:g}"
