from typing import Optional
from pydantic import Field

from models.common import (
    AnalysisResult,
    CamelModel,
    FeedbackType,
    Intent,
    Language,
    ModelName,
    Purpose,
    Rating,
)


class TransformRequest(CamelModel):
    """문장 변환 요청 모델"""
    text: str = Field(min_length=1, max_length=500, description="변환할 원문 (1~500자)")
    purpose: Optional[Purpose] = Field(default=None, description="문서 목적 (없으면 자동 분석)")
    intent: Optional[Intent] = Field(default=None, description="작성 의도 (없으면 자동 분석)")
    politeness: Optional[int] = Field(default=None, ge=1, le=3, description="정중함 레벨 1~3")
    tone_preset: str = Field(default="default", description="톤 프리셋")
    language: Language = Field(default=Language.KO, description="출력 언어")
    smart_mode: bool = Field(default=False, description="목적/의도/정중함 자동 분석 여부")
    model: ModelName = Field(default=ModelName.GPT_4O_MINI, description="사용할 모델")
    premium: bool = Field(default=False, description="프리미엄 사용자 여부 (클라이언트 표시용)")
    confirmed_analysis: Optional[AnalysisResult] = Field(
        default=None,
        description="사용자가 확인한 분석 결과 (있으면 분석 단계를 건너뛰고 바로 변환)",
    )


class FeedbackTransformSettings(CamelModel):
    """피드백에 첨부되는 변환 설정 스냅샷"""
    purpose: str
    intent: str
    politeness: int
    smart_mode: bool
    analysis_result: Optional[AnalysisResult] = None


class FeedbackRequest(CamelModel):
    """피드백 제출 요청 모델"""
    session_id: str = Field(min_length=1, description="세션 고유 ID")
    original_text: str = Field(min_length=1, description="원문")
    transformed_text: str = Field(min_length=1, description="변환 결과")
    transform_settings: FeedbackTransformSettings = Field(description="변환 설정")
    rating: Rating = Field(description="만족/개선필요")
    feedback_type: Optional[FeedbackType] = Field(default=None, description="개선 필요 유형")
    comment: Optional[str] = Field(default=None, max_length=500, description="상세 의견")
    timestamp: Optional[str] = Field(default=None, description="클라이언트 시각 (서버 시각으로 대체됨)")
