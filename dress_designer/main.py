from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import design
from .config import settings
from .services.channel import get_design_channel
from .services.renderer import get_design_renderer
from .utils.logger import logger

logger.info(f"Starting {settings.app_name} v{settings.app_version}")

# FastAPI 앱 생성
app = FastAPI(
    title=settings.app_name,
    description="드레스 디자인 요청 및 결과 표시",
    version=settings.app_version,
    debug=settings.debug
)

# CORS 설정 (환경변수 기반)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info(f"CORS enabled for origins: {settings.cors_origins}")

# 라우터 등록
app.include_router(design.router)


@app.get("/health")
async def health_check():
    """헬스 체크 및 시스템 상태"""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "design_service_url": settings.base_url,
        "renderer_mounted": get_design_renderer().is_mounted,
        "config": {
            "request_timeout_seconds": settings.design_request_timeout_seconds,
            "generation_delay_seconds": settings.generation_delay_seconds
        }
    }


@app.on_event("startup")
async def startup_event():
    """애플리케이션 시작 시 렌더러를 채널에 연결"""
    logger.info("="*50)
    logger.info("Application startup")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Design service: {settings.base_url}")
    get_design_renderer().mount(get_design_channel())
    logger.info("="*50)


@app.on_event("shutdown")
async def shutdown_event():
    """애플리케이션 종료 시 렌더러 해제"""
    get_design_renderer().unmount()
    logger.info("Application shutdown")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
