from typing import Dict
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# .env 파일 자동 로드
load_dotenv()


class Settings(BaseSettings):
    """애플리케이션 설정 관리"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OpenAI API 설정
    openai_api_key: str = ""
    default_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.3
    llm_max_output_tokens: int = 1200
    llm_timeout: float = 60.0

    # 앱 설정
    debug: bool = False
    log_level: str = "INFO"

    # 스마트 모드 신뢰도 기준 (미만이면 사용자 확인 필요)
    confidence_threshold: float = 0.7

    # 프리미엄/관리자 키 (PREMIUM_KEYS는 쉼표 구분)
    premium_keys: str = ""
    admin_key: str = ""

    # 티어별 모델 일일 사용 한도
    usage_limits: Dict[str, Dict[str, int]] = {
        "free": {"gpt-4o-mini": 5},
        "premium": {"gpt-4o-mini": 50, "gpt-4o": 10},
    }

    # 저장 경로
    usage_store_path: str = "data/usage/usage.json"
    feedback_log_path: str = "data/feedback/feedback.jsonl"


# 전역 설정 인스턴스
settings = Settings()
