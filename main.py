"""
Faye's Diary 应用主入口
启动FastAPI应用，提供首页、日记、灵感、任务四个分区的接口
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api import dashboard, diary, inspiration, sections, tasks
from src.backend.client import backend_client
from src.utils.config import settings
from src.utils.errors import AppError, ValidationError
from src.utils.logger import logger

# 创建FastAPI应用
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug
)

app.include_router(sections.router)
app.include_router(dashboard.router)
app.include_router(diary.router)
app.include_router(inspiration.router)
app.include_router(tasks.router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """业务异常统一转换为前端通知"""
    logger.warning(f"请求失败: {request.method} {request.url.path} - {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_notification())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request,
                                     exc: RequestValidationError) -> JSONResponse:
    """请求参数校验失败同样以通知返回"""
    errors = exc.errors()
    if errors:
        field = errors[0].get("loc", ("request",))[-1]
        message = f"Invalid {field}: {errors[0].get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    logger.warning(f"请求参数错误: {request.method} {request.url.path} - {message}")
    error = ValidationError(message)
    return JSONResponse(status_code=error.status_code, content=error.to_notification())


@app.on_event("startup")
async def startup_event():
    """应用启动时执行"""
    logger.info(f"{settings.app_name} v{settings.app_version} 启动成功")
    if not backend_client.is_configured():
        logger.warning("后端服务未配置，请设置 SUPABASE_URL 和 SUPABASE_ANON_KEY")


@app.on_event("shutdown")
async def shutdown_event():
    """应用关闭时执行"""
    logger.info(f"{settings.app_name} 已关闭")


@app.get("/")
async def root():
    """根路径，返回应用信息"""
    return {
        "app_name": settings.app_name,
        "version": settings.app_version,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """健康检查接口"""
    return {
        "status": "healthy",
        "code": 0,
        "backend_configured": backend_client.is_configured()
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"启动服务器: {settings.host}:{settings.port}")
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
