"""
模块运行时
包装用户提供的事件分派函数

支持两种分派形式:
- 分派函数: dispatch(state, event_type)，内部按事件类型分支
- 分派表: {event_type: handler(state)}
"""

from typing import Callable, Dict, List, Mapping, Union

from modsim.core.errors import MissingInitHandlerError, UnknownEventTypeError
from modsim.core.simulation_state import SimulationState
from modsim.models.enums import INIT_EVENT
from modsim.models.module_model import ModuleDescriptor


DispatchFunction = Callable[[SimulationState, str], None]
EventHandler = Callable[[SimulationState], None]
Dispatch = Union[DispatchFunction, Mapping[str, EventHandler]]


class ModuleRuntime:
    """
    单个模块的运行时包装

    未知事件类型统一抛出 UnknownEventTypeError，由调度器记录警告后继续
    """

    def __init__(self, descriptor: ModuleDescriptor, dispatch: Dispatch):
        """
        初始化模块运行时

        Args:
            descriptor: 模块描述
            dispatch: 分派函数或分派表

        Raises:
            MissingInitHandlerError: 分派表或声明的事件类型中没有init
            TypeError: dispatch既不是可调用对象也不是映射
        """
        self.descriptor = descriptor
        self._table: Dict[str, EventHandler] = {}
        self._function: DispatchFunction = None

        if isinstance(dispatch, Mapping):
            self._table = dict(dispatch)
            if INIT_EVENT not in self._table:
                raise MissingInitHandlerError(descriptor.name)
            undeclared = [t for t in self._table if descriptor.handles(t) is False]
            if undeclared:
                raise ValueError(
                    f"模块'{descriptor.name}'的分派表包含未声明的事件类型: "
                    f"{', '.join(undeclared)}"
                )
        elif callable(dispatch):
            if not descriptor.declares_init():
                raise MissingInitHandlerError(descriptor.name)
            self._function = dispatch
        else:
            raise TypeError(
                f"模块'{descriptor.name}'的dispatch必须是可调用对象或事件类型映射"
            )

    @property
    def name(self) -> str:
        """模块名称"""
        return self.descriptor.name

    def event_types(self) -> List[str]:
        """已知的事件类型（分派函数且未声明时为空）"""
        if self._table:
            return list(self._table.keys())
        return list(self.descriptor.event_types)

    def dispatch(self, state: SimulationState, event_type: str):
        """
        分派事件到对应处理分支

        Args:
            state: 共享仿真状态
            event_type: 事件类型

        Raises:
            UnknownEventTypeError: 没有匹配的处理分支
        """
        if self._table:
            handler = self._table.get(event_type)
            if handler is None:
                raise UnknownEventTypeError(self.name, event_type)
            handler(state)
            return

        if self.descriptor.handles(event_type) is False:
            raise UnknownEventTypeError(self.name, event_type)
        self._function(state, event_type)

    def __repr__(self) -> str:
        return f"ModuleRuntime(name={self.name!r})"
