"""
模块注册表与依赖解析
使用NetworkX构建和管理模块间的数据依赖图

功能:
- 注册模块（名称唯一、依赖无环）
- 从声明的输入/输出构建依赖图（生产者 → 消费者）
- 稳定拓扑排序确定激活顺序（无依赖关系时保持列出顺序）
- 报告没有生产者的输入（警告，不致命）
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import networkx as nx

from modsim.core.errors import (
    CyclicDependencyError,
    DuplicateModuleNameError,
    UnknownModuleError,
)
from modsim.core.module_runtime import Dispatch, ModuleRuntime
from modsim.models.module_model import ModuleDescriptor

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """
    模块注册表

    保存每个模块的描述与运行时，按注册顺序排列。
    依赖图在查询时根据所选模块即时构建
    """

    def __init__(self):
        """初始化空注册表"""
        self._runtimes: Dict[str, ModuleRuntime] = {}

    def register(self, descriptor: ModuleDescriptor, dispatch: Dispatch) -> ModuleRuntime:
        """
        注册模块

        Args:
            descriptor: 模块描述
            dispatch: 分派函数或分派表

        Returns:
            模块运行时

        Raises:
            DuplicateModuleNameError: 名称已注册
            MissingInitHandlerError: 未处理init事件
            CyclicDependencyError: 新模块使依赖图成环（注册被回滚）
        """
        if descriptor.name in self._runtimes:
            raise DuplicateModuleNameError(descriptor.name)

        runtime = ModuleRuntime(descriptor, dispatch)
        self._runtimes[descriptor.name] = runtime

        graph = self.dependency_graph()
        if not nx.is_directed_acyclic_graph(graph):
            del self._runtimes[descriptor.name]
            raise _cycle_error(graph)

        logger.debug(
            f"Registered module '{descriptor.name}' "
            f"(inputs={sorted(descriptor.input_names())}, "
            f"outputs={sorted(descriptor.output_names())})"
        )
        return runtime

    def unregister(self, name: str) -> ModuleRuntime:
        """
        移除模块

        Raises:
            UnknownModuleError: 模块未注册
        """
        if name not in self._runtimes:
            raise UnknownModuleError([name])
        return self._runtimes.pop(name)

    def clear(self):
        """清空注册表"""
        self._runtimes = {}

    # ============ 查询 ============

    def names(self) -> List[str]:
        """按注册顺序获取模块名称"""
        return list(self._runtimes.keys())

    def get_runtime(self, name: str) -> ModuleRuntime:
        """
        获取模块运行时

        Raises:
            UnknownModuleError: 模块未注册
        """
        if name not in self._runtimes:
            raise UnknownModuleError([name])
        return self._runtimes[name]

    def get_descriptor(self, name: str) -> ModuleDescriptor:
        """获取模块描述"""
        return self.get_runtime(name).descriptor

    def descriptors(self, names: Optional[Sequence[str]] = None) -> Dict[str, ModuleDescriptor]:
        """
        获取模块描述（保持给定顺序）

        Args:
            names: 模块名称，None表示全部已注册模块
        """
        return {name: self._runtimes[name].descriptor for name in self._select(names)}

    def __contains__(self, name: str) -> bool:
        return name in self._runtimes

    def __len__(self) -> int:
        return len(self._runtimes)

    def _select(self, names: Optional[Sequence[str]]) -> List[str]:
        """校验并返回所选模块名称"""
        if names is None:
            return self.names()
        selected = list(names)
        unknown = [n for n in selected if n not in self._runtimes]
        if unknown:
            raise UnknownModuleError(unknown)
        return selected

    # ============ 依赖图 ============

    def dependency_graph(self, names: Optional[Sequence[str]] = None) -> nx.DiGraph:
        """
        构建依赖图

        节点属性 position 为列出顺序，descriptor 为模块描述；
        边 A → B 表示A的输出被B声明为输入，边属性 objects 为传递的对象名

        Args:
            names: 参与的模块名称（有序），None表示全部已注册模块

        Returns:
            有向图
        """
        selected = self._select(names)
        graph = nx.DiGraph()

        producers: Dict[str, List[str]] = {}
        for position, name in enumerate(selected):
            descriptor = self._runtimes[name].descriptor
            graph.add_node(name, position=position, descriptor=descriptor)
            for obj in descriptor.output_names():
                producers.setdefault(obj, []).append(name)

        for name in selected:
            descriptor = self._runtimes[name].descriptor
            for obj in sorted(descriptor.input_names()):
                for producer in producers.get(obj, []):
                    # 模块读写同一对象不构成依赖
                    if producer == name:
                        continue
                    if graph.has_edge(producer, name):
                        graph.edges[producer, name]["objects"].append(obj)
                    else:
                        graph.add_edge(producer, name, objects=[obj])

        return graph

    def resolve_order(self, names: Optional[Sequence[str]] = None) -> List[str]:
        """
        计算模块激活顺序

        每个生产者排在其消费者之前；没有依赖关系的模块保持列出顺序

        Args:
            names: 参与的模块名称（有序），None表示按注册顺序的全部模块

        Returns:
            拓扑排序后的模块名称

        Raises:
            UnknownModuleError: 引用了未注册模块
            CyclicDependencyError: 依赖图存在环
        """
        graph = self.dependency_graph(names)
        if not nx.is_directed_acyclic_graph(graph):
            raise _cycle_error(graph)

        for module_name, objects in self.unmatched_inputs(names).items():
            logger.warning(
                f"Module '{module_name}' declares inputs with no producer among "
                f"selected modules: {', '.join(objects)} (must be supplied before init)"
            )

        position = nx.get_node_attributes(graph, "position")
        return list(nx.lexicographical_topological_sort(graph, key=lambda n: position[n]))

    def unmatched_inputs(self, names: Optional[Sequence[str]] = None) -> Dict[str, List[str]]:
        """
        查找没有生产者的输入

        Args:
            names: 参与的模块名称，None表示全部已注册模块

        Returns:
            模块名 -> 无生产者的输入对象名（只包含存在此类输入的模块）
        """
        selected = self._select(names)
        produced = set()
        for name in selected:
            produced |= self._runtimes[name].descriptor.output_names()

        unmatched = {}
        for name in selected:
            missing = sorted(self._runtimes[name].descriptor.input_names() - produced)
            if missing:
                unmatched[name] = missing
        return unmatched

    def get_producers(self, object_name: str, names: Optional[Sequence[str]] = None) -> List[str]:
        """获取输出指定对象的模块"""
        return [
            name for name in self._select(names)
            if object_name in self._runtimes[name].descriptor.output_names()
        ]

    def get_consumers(self, object_name: str, names: Optional[Sequence[str]] = None) -> List[str]:
        """获取以指定对象为输入的模块"""
        return [
            name for name in self._select(names)
            if object_name in self._runtimes[name].descriptor.input_names()
        ]


def _cycle_error(graph: nx.DiGraph) -> CyclicDependencyError:
    """从图中找出一个环并构造异常"""
    try:
        cycle = nx.find_cycle(graph)
    except nx.NetworkXNoCycle:
        return CyclicDependencyError(list(graph.nodes()))
    members = [u for u, v in cycle]
    objects = []
    for u, v in cycle:
        for obj in graph.edges[u, v].get("objects", []):
            if obj not in objects:
                objects.append(obj)
    return CyclicDependencyError(members, objects)


def graph_to_dict(graph: nx.DiGraph) -> Dict[str, Any]:
    """
    将依赖图转换为可序列化字典（供可视化工具使用）

    Args:
        graph: dependency_graph() 返回的依赖图

    Returns:
        包含nodes和edges的字典
    """
    nodes = []
    for name, data in graph.nodes(data=True):
        descriptor: ModuleDescriptor = data.get("descriptor")
        nodes.append({
            "name": name,
            "position": data.get("position"),
            "inputs": sorted(descriptor.input_names()) if descriptor else [],
            "outputs": sorted(descriptor.output_names()) if descriptor else [],
            "in_degree": graph.in_degree(name),
            "out_degree": graph.out_degree(name),
        })
    edges = [
        {"from": u, "to": v, "objects": list(data.get("objects", []))}
        for u, v, data in graph.edges(data=True)
    ]
    return {"nodes": nodes, "edges": edges}
