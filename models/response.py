from typing import Any, Dict, Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field

from models.common import AnalysisResult, CamelModel, UserTier

T = TypeVar("T")


class TransformResult(CamelModel):
    """변환 결과 모델"""
    revision: str = Field(default="", description="변환된 문장")
    tips: List[str] = Field(default_factory=list, description="작성 팁")
    subject: str = Field(default="", description="이메일 제목 (이메일이 아니면 빈 문자열)")
    summary: str = Field(default="", description="요약")
    analysis: Optional[AnalysisResult] = Field(default=None, description="1단계 분석 결과")
    needs_confirmation: bool = Field(default=False, description="사용자 확인 필요 여부")
    model_used: str = Field(default="", description="사용된 모델")

    model_config = ConfigDict(
        protected_namespaces=(),
        json_schema_extra={
            "example": {
                "revision": "가능하시다면 오늘 17시까지 자료 공유 부탁드립니다.",
                "tips": ["기한을 명확히 제시했습니다."],
                "subject": "",
                "summary": "자료 공유 요청",
                "needsConfirmation": False,
                "modelUsed": "gpt-4o-mini",
            }
        },
    )


class ApiSuccess(BaseModel, Generic[T]):
    """성공 응답 래퍼"""
    ok: bool = True
    data: T


class ApiError(BaseModel):
    """실패 응답 래퍼"""
    ok: bool = False
    error: str


class UsageStatus(CamelModel):
    """모델별 일일 사용량 상태"""
    can_use: bool
    remaining: int
    limit: int


class UsageReport(CamelModel):
    """호출자의 티어와 모델별 사용량"""
    tier: UserTier
    model: str
    allowed: bool
    usage: UsageStatus


class FeedbackReceipt(CamelModel):
    """피드백 저장 결과"""
    feedback_id: str
    message: str


class FeedbackStats(BaseModel):
    satisfied: int = 0
    needs_improvement: int = 0


class FeedbackPage(BaseModel):
    """관리자 피드백 조회 결과"""
    feedbacks: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    stats: FeedbackStats = Field(default_factory=FeedbackStats)
