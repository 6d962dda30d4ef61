from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict

from models.common import AnalysisResult, Intent, Language, ModelName, Purpose, TonePreset
from models.response import TransformResult
from utils.exceptions import PipelineError


class TransformSettings(BaseModel):
    """2단계 프롬프트 구성에 사용하는 확정 설정"""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    purpose: Purpose
    intent: Intent
    politeness: int
    language: Language = Language.KO
    tone_preset: TonePreset = TonePreset.DEFAULT
    smart_mode: bool = False
    model: ModelName = ModelName.GPT_4O_MINI
    premium: bool = False


class PromptPair(BaseModel):
    """시스템/유저 프롬프트 쌍"""
    system: str
    user: str

    def to_messages(self) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


class PipelineState(str, Enum):
    """변환 파이프라인 상태"""
    IDLE = "idle"
    ANALYZING = "analyzing"
    NEEDS_CONFIRMATION = "needs_confirmation"
    TRANSFORMING = "transforming"
    DONE = "done"
    FAILED = "failed"


@dataclass
class Completed:
    """2단계 변환까지 완료"""
    result: TransformResult
    path: List[PipelineState] = field(default_factory=list)
    used_fallback: bool = False

    @property
    def state(self) -> PipelineState:
        return PipelineState.DONE


@dataclass
class AwaitingConfirmation:
    """분석 신뢰도가 낮아 사용자 확인 대기"""
    result: TransformResult
    path: List[PipelineState] = field(default_factory=list)

    @property
    def state(self) -> PipelineState:
        return PipelineState.NEEDS_CONFIRMATION

    @property
    def analysis(self) -> Optional[AnalysisResult]:
        return self.result.analysis


@dataclass
class Failed:
    """요청 실패 (부분 결과 없음)"""
    error: PipelineError
    path: List[PipelineState] = field(default_factory=list)

    @property
    def state(self) -> PipelineState:
        return PipelineState.FAILED


PipelineOutcome = Union[Completed, AwaitingConfirmation, Failed]


@dataclass
class UsageCounter:
    """모델별 하루 사용량"""
    date: str
    used: int = 0
