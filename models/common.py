"""요청/응답/내부 모델이 공유하는 열거형과 분석 결과 모델"""

from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from utils.logging import logger


class CamelModel(BaseModel):
    """JSON에서는 camelCase, 파이썬에서는 snake_case를 쓰는 기본 모델"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Purpose(str, Enum):
    """문서 목적"""
    EMAIL = "email"
    REPORT = "report"
    MEMO = "memo"
    MESSENGER = "messenger"
    MINUTES = "minutes"


class Intent(str, Enum):
    """작성 의도"""
    REQUEST = "request"
    DECLINE = "decline"
    REBUTTAL = "rebuttal"
    APOLOGY = "apology"
    PERSUADE = "persuade"
    NOTICE = "notice"
    ESCALATION = "escalation"


class Language(str, Enum):
    KO = "ko"
    EN = "en"


class TonePreset(str, Enum):
    DEFAULT = "default"
    FRIENDLY = "friendly"
    FIRM = "firm"
    CAUTIOUS = "cautious"


class ModelName(str, Enum):
    GPT_4O_MINI = "gpt-4o-mini"
    GPT_4O = "gpt-4o"


class UserTier(str, Enum):
    FREE = "free"
    PREMIUM = "premium"


class EmotionIntensity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Rating(str, Enum):
    SATISFIED = "satisfied"
    NEEDS_IMPROVEMENT = "needs_improvement"


class FeedbackType(str, Enum):
    TONE = "tone"
    ACCURACY = "accuracy"
    NATURALNESS = "naturalness"
    LENGTH = "length"
    OTHER = "other"


class AnalysisDetail(CamelModel):
    """감정/맥락 분석 상세"""
    model_config = ConfigDict(frozen=True)

    detected_emotions: List[str] = Field(description="감지된 감정 목록")
    emotion_intensity: EmotionIntensity = Field(description="감정 강도")
    context_clues: List[str] = Field(description="문맥 단서")
    reasoning: str = Field(description="판단 근거")


class AlternativeOption(CamelModel):
    """신뢰도가 낮을 때 제시되는 대안 설정"""
    model_config = ConfigDict(frozen=True)

    purpose: Optional[Purpose] = None
    intent: Optional[Intent] = None
    politeness: Optional[int] = Field(default=None, ge=1, le=3)
    reason: str = ""


class AnalysisResult(CamelModel):
    """1단계(분석) 결과. 생성 후 변경하지 않는다."""
    model_config = ConfigDict(frozen=True)

    purpose: Purpose
    intent: Intent
    politeness: int = Field(ge=1, le=3)
    confidence: float = Field(ge=0.0, le=1.0)
    analysis: AnalysisDetail
    alternative_options: Optional[List[AlternativeOption]] = None

    @field_validator("alternative_options", mode="before")
    @classmethod
    def drop_invalid_alternatives(cls, value: Any) -> Any:
        # 대안 항목 하나가 잘못되어도 분석 전체를 버리지 않는다
        if not isinstance(value, list):
            return value
        valid = []
        for item in value:
            try:
                valid.append(AlternativeOption.model_validate(item))
            except ValueError as e:
                logger.warning(f"잘못된 대안 설정 무시: {item} ({e})")
        return valid
