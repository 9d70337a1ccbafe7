import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

# 저장소 루트 (k6_mcp/core/config.py 기준 두 단계 위)
PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return float(value)


class Settings:
    """애플리케이션 설정"""

    # K6 App Server 설정
    K6_APP_SERVER_URL: str = os.getenv("K6_APP_SERVER_URL", "http://localhost:3001").rstrip("/")
    # 비어 있으면 타임아웃 없음 (전달 호출은 App Server가 응답할 때까지 대기)
    K6_APP_SERVER_TIMEOUT_SECONDS: Optional[float] = _optional_float("K6_APP_SERVER_TIMEOUT_SECONDS")
    K6_APP_SERVER_HEALTH_TIMEOUT_SECONDS: float = float(os.getenv("K6_APP_SERVER_HEALTH_TIMEOUT_SECONDS", "5"))

    # k6 스크립트 생성 설정
    K6_SCRIPT_FILE_FOLDER: str = os.getenv("K6_SCRIPT_FILE_FOLDER", str(PROJECT_ROOT / "test-scripts"))
    K6_DEFAULT_TARGET_URL: str = os.getenv("K6_DEFAULT_TARGET_URL", "http://localhost:3000")
    SCRIPT_PREVIEW_LENGTH: int = int(os.getenv("SCRIPT_PREVIEW_LENGTH", "500"))

    # 테스트 출력 설정
    OUTPUT_MAX_LENGTH: int = int(os.getenv("OUTPUT_MAX_LENGTH", "10000"))

    # 로깅 설정
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def get_app_server_config(cls) -> dict:
        """App Server 접속 설정을 딕셔너리로 반환"""
        return {
            "base_url": cls.K6_APP_SERVER_URL,
            "timeout_seconds": cls.K6_APP_SERVER_TIMEOUT_SECONDS,
            "health_timeout_seconds": cls.K6_APP_SERVER_HEALTH_TIMEOUT_SECONDS,
        }

    @classmethod
    def get_generation_config(cls) -> dict:
        """스크립트 생성 설정을 딕셔너리로 반환"""
        return {
            "scripts_dir": cls.K6_SCRIPT_FILE_FOLDER,
            "default_target_url": cls.K6_DEFAULT_TARGET_URL,
            "preview_length": cls.SCRIPT_PREVIEW_LENGTH,
        }

    @classmethod
    def validate_app_server_config(cls) -> bool:
        """App Server 설정 유효성 검증"""
        if not cls.K6_APP_SERVER_URL.startswith(("http://", "https://")):
            return False

        if cls.K6_APP_SERVER_HEALTH_TIMEOUT_SECONDS <= 0:
            return False

        if cls.K6_APP_SERVER_TIMEOUT_SECONDS is not None and cls.K6_APP_SERVER_TIMEOUT_SECONDS <= 0:
            return False

        return True


settings = Settings()
