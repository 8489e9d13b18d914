"""
数据验证工具
在初始化仿真之前收集配置中的全部问题

功能:
- 仿真配置验证（模块存在、依赖无环、参数覆盖有效）
- 依赖完整性检查（无生产者的输入）
"""

from typing import Any, Dict, List, Tuple, Union

import networkx as nx
from pydantic import ValidationError

from modsim.core.module_registry import ModuleRegistry
from modsim.models.config_model import SimulationConfig


def validate_simulation_config(
    config: Union[SimulationConfig, Dict[str, Any]],
    registry: ModuleRegistry
) -> Tuple[bool, List[str], List[str]]:
    """
    验证仿真配置

    检查内容:
    - 配置字段有效性
    - 模块均已注册
    - 依赖图无环
    - 参数覆盖只针对所选模块
    - 覆盖的参数已被模块声明（警告）
    - 输入有生产者（警告）

    Args:
        config: 仿真配置（模型或字典）
        registry: 模块注册表

    Returns:
        (是否有效, 错误列表, 警告列表)
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(config, SimulationConfig):
        try:
            config = SimulationConfig.model_validate(config)
        except ValidationError as e:
            for err in e.errors():
                location = ".".join(str(p) for p in err["loc"]) or "config"
                errors.append(f"{location}: {err['msg']}")
            return False, errors, warnings

    names = list(config.modules) or registry.names()
    if not names:
        warnings.append("没有选择任何模块，仿真将立即结束")

    # 1. 检查模块是否已注册
    unknown = [n for n in names if n not in registry]
    for name in unknown:
        errors.append(f"模块'{name}'未注册")
    known = [n for n in names if n in registry]

    # 2. 检查依赖环
    graph = registry.dependency_graph(known)
    if not nx.is_directed_acyclic_graph(graph):
        try:
            cycle = nx.find_cycle(graph)
            cycle_str = " -> ".join([f"{u}" for u, v in cycle])
            errors.append(f"模块依赖存在循环: {cycle_str}")
        except nx.NetworkXNoCycle:
            errors.append("模块依赖存在循环")

    # 3. 检查参数覆盖
    for module_name, overrides in config.per_module_params.items():
        if module_name not in names:
            errors.append(f"参数覆盖引用了未选择的模块'{module_name}'")
            continue
        if module_name not in registry:
            continue
        declared = registry.get_descriptor(module_name).parameters
        for param_name in overrides:
            if param_name not in declared:
                warnings.append(f"模块'{module_name}'未声明参数'{param_name}'")

    # 4. 检查全局参数是否被任何模块使用
    for param_name in config.global_params:
        if not any(param_name in registry.get_descriptor(n).parameters for n in known):
            warnings.append(f"全局参数'{param_name}'未被任何所选模块声明")

    # 5. 检查无生产者的输入
    for module_name, objects in registry.unmatched_inputs(known).items():
        warnings.append(
            f"模块'{module_name}'的输入没有生产者: {', '.join(objects)}"
            f"（需在init之前由外部提供）"
        )

    return len(errors) == 0, errors, warnings


def check_dependency_connectivity(registry: ModuleRegistry, names: List[str] = None) -> Dict[str, Any]:
    """
    检查依赖图连通性

    Args:
        registry: 模块注册表
        names: 所选模块，None表示全部

    Returns:
        包含孤立模块和弱连通分量的字典
    """
    graph = registry.dependency_graph(names)
    isolated = [n for n in graph.nodes() if graph.degree(n) == 0]
    components = [sorted(c) for c in nx.weakly_connected_components(graph)]
    return {
        "is_connected": len(components) <= 1,
        "component_count": len(components),
        "components": components,
        "isolated_modules": isolated,
    }
