"""
FastAPI 主入口
模块依赖诊断服务：为可视化工具提供只读的模块与依赖图查询
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from modsim import __version__
from modsim.api import config, modules
from modsim.api.deps import get_registry
from modsim.core.module_registry import ModuleRegistry
from modsim.utils.log_config import LogConfig, setup_logging

logger = logging.getLogger(__name__)


def create_app(
    registry: Optional[ModuleRegistry] = None,
    log_config: Optional[LogConfig] = None
) -> FastAPI:
    """
    创建FastAPI应用

    Args:
        registry: 要暴露的模块注册表，None使用默认注册表
        log_config: 日志配置

    Returns:
        FastAPI应用实例
    """
    setup_logging(log_config)

    app = FastAPI(
        title="modsim 模块依赖诊断服务",
        description="Discrete-event module scheduler - dependency diagnostics",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS中间件配置 - 允许可视化前端跨域访问
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if registry is not None:
        app.dependency_overrides[get_registry] = lambda: registry

    # 注册API路由
    app.include_router(modules.router, prefix="/api", tags=["模块与依赖图"])
    app.include_router(config.router, prefix="/api/config", tags=["配置管理"])

    @app.get("/health")
    async def health_check():
        """
        健康检查接口
        """
        return JSONResponse(content={
            "status": "healthy",
            "version": __version__,
            "service": "modsim dependency diagnostics"
        })

    logger.info("modsim diagnostics app created")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("modsim.main:app", host="0.0.0.0", port=8000, reload=True)
