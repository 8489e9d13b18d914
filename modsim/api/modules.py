"""
模块与依赖图接口
为外部可视化/诊断工具提供只读结构查询

API端点:
- GET /api/modules: 获取已注册模块列表
- GET /api/modules/{name}: 获取模块描述
- POST /api/graph/resolve: 解析所选模块的依赖图与激活顺序
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from modsim.api.deps import APIResponse, get_registry
from modsim.core.errors import CyclicDependencyError, UnknownModuleError
from modsim.core.module_registry import ModuleRegistry, graph_to_dict

router = APIRouter()


# ============ 请求模型 ============

class GraphRequest(BaseModel):
    """依赖图请求"""
    modules: List[str] = Field(
        default=[],
        description="所选模块（有序），为空表示全部已注册模块"
    )


# ============ 模块查询 ============

@router.get("/modules", response_model=APIResponse)
async def list_modules(registry: ModuleRegistry = Depends(get_registry)):
    """
    获取已注册模块列表

    按注册顺序返回每个模块的描述
    """
    modules = [registry.get_descriptor(name).model_dump() for name in registry.names()]
    return APIResponse(
        success=True,
        message=f"共{len(modules)}个模块",
        data=modules
    )


@router.get("/modules/{name}", response_model=APIResponse)
async def get_module(name: str, registry: ModuleRegistry = Depends(get_registry)):
    """获取指定模块描述"""
    if name not in registry:
        raise HTTPException(status_code=404, detail=f"模块'{name}'未注册")

    descriptor = registry.get_descriptor(name)
    return APIResponse(
        success=True,
        message="获取模块成功",
        data={
            **descriptor.model_dump(),
            "producers_of_inputs": {
                obj: registry.get_producers(obj) for obj in sorted(descriptor.input_names())
            },
            "consumers_of_outputs": {
                obj: registry.get_consumers(obj) for obj in sorted(descriptor.output_names())
            },
        }
    )


# ============ 依赖图 ============

@router.post("/graph/resolve", response_model=APIResponse)
async def resolve_graph(
    request: GraphRequest,
    registry: ModuleRegistry = Depends(get_registry)
):
    """
    解析依赖图

    返回节点、边、激活顺序和无生产者的输入；
    未注册模块返回404，依赖环返回422并指出环中模块
    """
    names = request.modules or None
    try:
        graph = registry.dependency_graph(names)
        order = registry.resolve_order(names)
    except UnknownModuleError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CyclicDependencyError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "cycle": e.cycle, "objects": e.objects}
        )

    return APIResponse(
        success=True,
        message="依赖解析成功",
        data={
            **graph_to_dict(graph),
            "order": order,
            "unmatched_inputs": registry.unmatched_inputs(names),
        }
    )
