"""
模块描述模型
定义模块的元数据：参数、声明的输入与输出

模型:
- ObjectSpec: 数据总线对象声明（名称 + 类型）
- ModuleDescriptor: 模块元数据
"""

from types import MappingProxyType
from typing import Any, Dict, Optional, Set, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from modsim.models.enums import INIT_EVENT


class ObjectSpec(BaseModel):
    """
    对象声明

    Attributes:
        name: 对象名称（模块间数据总线上的键）
        object_type: 对象类型（仅作说明，不做运行时检查）
        description: 描述
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="对象名称")
    object_type: str = Field(default="ANY", description="对象类型")
    description: str = Field(default="", description="描述")


class ModuleDescriptor(BaseModel):
    """
    模块描述

    注册后不可修改：输入输出为元组，参数表为只读映射。
    若模块A的某个输出被模块B声明为输入，则依赖图中存在一条 A → B 的边

    Attributes:
        name: 模块名称（唯一）
        inputs: 声明的输入对象
        outputs: 声明的输出对象
        parameters: 参数名 -> 默认值
        event_types: 模块处理的事件类型（为空时不做声明检查）
        description: 描述
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="模块名称")
    inputs: Tuple[ObjectSpec, ...] = Field(default=(), description="声明的输入")
    outputs: Tuple[ObjectSpec, ...] = Field(default=(), description="声明的输出")
    parameters: Dict[str, Any] = Field(default={}, validate_default=True, description="参数默认值")
    event_types: Tuple[str, ...] = Field(default=(), description="处理的事件类型")
    description: str = Field(default="", description="描述")

    @field_validator("inputs", "outputs", mode="before")
    @classmethod
    def _coerce_object_specs(cls, value: Any) -> Any:
        """允许用字符串或 (名称, 类型) 元组简写对象声明"""
        if value is None:
            return []
        specs = []
        for item in value:
            if isinstance(item, str):
                specs.append({"name": item})
            elif isinstance(item, (tuple, list)):
                specs.append({"name": item[0], "object_type": item[1] if len(item) > 1 else "ANY"})
            else:
                specs.append(item)
        return specs

    @field_validator("parameters")
    @classmethod
    def _freeze_parameters(cls, value: Dict[str, Any]) -> Any:
        """参数默认值表只读"""
        return MappingProxyType(dict(value))

    @field_serializer("parameters")
    def _serialize_parameters(self, value: Any) -> Dict[str, Any]:
        return dict(value)

    def input_names(self) -> Set[str]:
        """获取输入对象名称集合"""
        return {spec.name for spec in self.inputs}

    def output_names(self) -> Set[str]:
        """获取输出对象名称集合"""
        return {spec.name for spec in self.outputs}

    def handles(self, event_type: str) -> Optional[bool]:
        """
        判断模块是否声明处理某事件类型

        Args:
            event_type: 事件类型

        Returns:
            未声明事件类型时返回None（由处理器自行判断）
        """
        if not self.event_types:
            return None
        return event_type in self.event_types

    def declares_init(self) -> bool:
        """是否声明了init事件（未声明任何事件类型时视为声明）"""
        return not self.event_types or INIT_EVENT in self.event_types
