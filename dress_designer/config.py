"""애플리케이션 설정"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """환경변수 기반 설정"""

    # Application
    app_name: str = "Dress Designer"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Design service (BASE_URL 환경변수)
    base_url: str = "http://localhost:8000"
    design_request_timeout_seconds: int = 30

    # Mock generation
    generation_delay_seconds: float = 2.0  # 디자인 생성 시뮬레이션 지연
    placeholder_image_url: str = "https://via.placeholder.com/400x600"

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


# 전역 설정 인스턴스
settings = Settings()
