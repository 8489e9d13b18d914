"""
仿真配置模型
定义一次仿真运行的配置参数

配置项:
- 参与仿真的模块列表（顺序即同依赖层级的激活顺序）
- 起止时间与时间单位
- 全局参数与模块参数覆盖
- 随机种子
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

from modsim.models.enums import TimeUnit


class SimulationConfig(BaseModel):
    """
    仿真配置模型

    Attributes:
        modules: 参与仿真的模块名称（有序）
        start_time: 开始时间
        end_time: 结束时间（时间大于该值的事件被丢弃）
        time_unit: 时间单位（仅用于诊断显示）
        global_params: 全局参数覆盖（参数名 -> 值）
        per_module_params: 模块参数覆盖（模块名 -> 参数名 -> 值）
        random_seed: 随机种子（None为随机）
    """

    modules: List[str] = Field(
        default=[],
        description="参与仿真的模块名称（有序）"
    )
    start_time: float = Field(
        default=0.0,
        allow_inf_nan=False,
        description="开始时间"
    )
    end_time: float = Field(
        default=10.0,
        allow_inf_nan=False,
        description="结束时间"
    )
    time_unit: TimeUnit = Field(
        default=TimeUnit.YEAR,
        description="时间单位（仅用于诊断显示）"
    )
    global_params: Dict[str, Any] = Field(
        default={},
        description="全局参数覆盖"
    )
    per_module_params: Dict[str, Dict[str, Any]] = Field(
        default={},
        description="模块参数覆盖"
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="随机种子（用于复现结果，None为随机）"
    )

    @field_validator("modules")
    @classmethod
    def _check_unique_modules(cls, value: List[str]) -> List[str]:
        """模块名称不允许重复"""
        seen = set()
        duplicates = []
        for name in value:
            if name in seen:
                duplicates.append(name)
            seen.add(name)
        if duplicates:
            raise ValueError(f"模块列表中存在重复名称: {', '.join(duplicates)}")
        return value

    @model_validator(mode="after")
    def _check_time_range(self) -> "SimulationConfig":
        """结束时间不得早于开始时间"""
        if self.end_time < self.start_time:
            raise ValueError(
                f"结束时间({self.end_time})早于开始时间({self.start_time})"
            )
        return self

    @computed_field
    @property
    def duration(self) -> float:
        """
        仿真时长

        Returns:
            结束时间 - 开始时间
        """
        return self.end_time - self.start_time

    def get_module_overrides(self, module_name: str) -> Dict[str, Any]:
        """
        获取指定模块的参数覆盖

        Args:
            module_name: 模块名称

        Returns:
            参数名 -> 覆盖值，不存在返回空字典
        """
        return dict(self.per_module_params.get(module_name, {}))

    class Config:
        json_schema_extra = {
            "example": {
                "modules": ["randomLandscape", "fireSpread", "caribouMovement"],
                "start_time": 0.0,
                "end_time": 10.0,
                "time_unit": "year",
                "global_params": {"stackName": "landscape"},
                "per_module_params": {"fireSpread": {"nFires": 10}},
                "random_seed": 42
            }
        }
