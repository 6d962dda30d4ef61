import time
from typing import List, Optional

from pydantic import ValidationError

from config import policies
from config.settings import settings
from core.llm.client import LLMClient, llm_client
from core.llm.prompt_builder import PromptBuilder, prompt_builder, resolve_tone_preset
from core.usage_gate import DEFAULT_CLIENT_ID, UsageGate, usage_gate
from models.common import AnalysisResult, UserTier
from models.internal import (
    AwaitingConfirmation,
    Completed,
    Failed,
    PipelineOutcome,
    PipelineState,
    TransformSettings,
)
from models.request import TransformRequest
from models.response import TransformResult
from utils.exceptions import (
    AnalysisParseError,
    AuthorizationError,
    LLMAPIError,
    QuotaExceededError,
    TransformParseError,
)
from utils.helpers import extract_json_object
from utils.logging import logger


class TransformOrchestrator:
    """
    2단계 변환 파이프라인

    Idle → Analyzing → {NeedsConfirmation | Transforming} → Done
    어느 단계에서든 Failed로 끝날 수 있다.

    - 스마트 모드이거나 목적/의도/정중함 중 하나라도 없으면 1단계 분석 실행
    - 분석 신뢰도가 기준 미만이면 2단계 없이 사용자 확인 대기
    - 분석 호출/파싱 실패 시 기본 설정으로 조용히 일반 변환 진행
    - 2단계 호출 실패는 요청 실패
    """

    def __init__(
        self,
        llm: LLMClient,
        gate: UsageGate,
        builder: PromptBuilder,
        confidence_threshold: Optional[float] = None,
    ):
        self.llm = llm
        self.gate = gate
        self.builder = builder
        self.confidence_threshold = (
            settings.confidence_threshold if confidence_threshold is None else confidence_threshold
        )

    @staticmethod
    def needs_analysis(request: TransformRequest) -> bool:
        if request.confirmed_analysis is not None:
            return False
        return (
            request.smart_mode
            or request.purpose is None
            or request.intent is None
            or request.politeness is None
        )

    def fallback_settings(self, request: TransformRequest) -> TransformSettings:
        """요청 값 또는 기본값(email/request/2)으로 설정 구성"""
        return TransformSettings(
            purpose=request.purpose or policies.DEFAULT_PURPOSE,
            intent=request.intent or policies.DEFAULT_INTENT,
            politeness=request.politeness or policies.DEFAULT_POLITENESS,
            language=request.language,
            tone_preset=resolve_tone_preset(request.tone_preset),
            smart_mode=request.smart_mode,
            model=request.model,
            premium=request.premium,
        )

    def settings_from_analysis(self, request: TransformRequest, analysis: AnalysisResult) -> TransformSettings:
        return self.fallback_settings(request).model_copy(update={
            "purpose": analysis.purpose,
            "intent": analysis.intent,
            "politeness": analysis.politeness,
        })

    def admit(self, request: TransformRequest, tier: UserTier, client_id: str) -> None:
        """
        생성 호출 전 모델 권한과 사용량을 확인합니다.

        Raises:
            AuthorizationError: 티어에 허용되지 않은 모델
            QuotaExceededError: 오늘 한도 소진
        """
        model = request.model.value
        if not self.gate.can_use_model(request.model, tier):
            raise AuthorizationError(f"{model} 모델을 사용할 권한이 없습니다. 프리미엄 구독이 필요합니다.")

        usage = self.gate.check_usage_limit(request.model, tier, client_id)
        if not usage.can_use:
            raise QuotaExceededError(f"오늘 {model} 사용 한도({usage.limit}회)를 모두 사용했습니다.")

    async def analyze(self, request: TransformRequest) -> AnalysisResult:
        """
        1단계: 목적/의도/정중함/신뢰도 분석

        Raises:
            AnalysisParseError: 응답이 비었거나 AnalysisResult로 해석되지 않을 때
            LLMAPIError: 분석 호출 실패
        """
        prompt = self.builder.build_analysis_prompt(request.text)
        raw = await self.llm.generate(
            model=request.model.value,
            messages=prompt.to_messages(),
            output_schema="analysis_result",
        )
        data = extract_json_object(raw)
        if data is None:
            raise AnalysisParseError("분석 응답이 비었거나 JSON이 아닙니다")
        try:
            return AnalysisResult.model_validate(data)
        except ValidationError as e:
            raise AnalysisParseError(f"분석 응답이 스키마와 맞지 않습니다: {e.error_count()}개 오류")

    def parse_transform(self, raw: str) -> TransformResult:
        """
        2단계 응답 파싱

        Raises:
            TransformParseError: JSON 객체로 해석되지 않을 때
        """
        data = extract_json_object(raw)
        if data is None:
            raise TransformParseError("변환 응답이 JSON이 아닙니다")
        tips = data.get("tips") or []
        if not isinstance(tips, list):
            tips = [str(tips)]
        return TransformResult(
            revision=str(data.get("revision") or "").strip(),
            tips=[str(tip) for tip in tips],
            subject=str(data.get("subject") or ""),
            summary=str(data.get("summary") or ""),
        )

    async def transform(
        self,
        request: TransformRequest,
        ctx: TransformSettings,
        analysis: Optional[AnalysisResult] = None,
    ) -> TransformResult:
        """
        2단계: 변환 실행. 파싱 실패 시 원문 응답을 revision으로 감싼다.

        Raises:
            LLMAPIError: 변환 호출 실패
        """
        prompt = self.builder.build_transform_prompt(
            request.text, ctx, analysis, confirmed=request.confirmed_analysis is not None
        )
        raw = await self.llm.generate(
            model=request.model.value,
            messages=prompt.to_messages(),
            output_schema="transform_result",
        )
        try:
            result = self.parse_transform(raw)
        except TransformParseError as e:
            logger.warning(f"{e.message}, 원문 응답을 revision으로 사용")
            result = TransformResult(revision=(raw or "").strip())
        return result.model_copy(update={"analysis": analysis, "model_used": request.model.value})

    async def run(
        self,
        request: TransformRequest,
        tier: UserTier = UserTier.FREE,
        client_id: str = DEFAULT_CLIENT_ID,
    ) -> PipelineOutcome:
        """
        변환 요청 처리

        Args:
            request: 변환 요청
            tier: 호출자 티어
            client_id: 사용량 소유자 식별자

        Returns:
            Completed / AwaitingConfirmation / Failed 중 하나
        """
        path: List[PipelineState] = [PipelineState.IDLE]
        start_time = time.time()
        model = request.model.value
        logger.info(f"변환 요청: model={model}, tier={tier.value}, 길이={len(request.text)}자, smart={request.smart_mode}")

        try:
            self.admit(request, tier, client_id)
        except (AuthorizationError, QuotaExceededError) as e:
            logger.warning(f"요청 거부: {e.message}")
            path.append(PipelineState.FAILED)
            return Failed(error=e, path=path)

        analysis: Optional[AnalysisResult] = request.confirmed_analysis
        used_fallback = False

        if analysis is not None:
            logger.info(f"확인된 분석 결과로 변환: {analysis.purpose.value}/{analysis.intent.value}/{analysis.politeness}")
            ctx = self.settings_from_analysis(request, analysis)
        elif self.needs_analysis(request):
            path.append(PipelineState.ANALYZING)
            logger.info(f"1단계 분석 시작: {model}")
            try:
                analysis = await self.analyze(request)
            except (AnalysisParseError, LLMAPIError) as e:
                # 분석 실패는 사용자에게 노출하지 않고 일반 변환으로 진행
                logger.warning(f"1단계 분석 실패, 기본 설정으로 진행: {e.message}")
                analysis = None
                used_fallback = True

            if analysis is not None and analysis.confidence < self.confidence_threshold:
                logger.info(f"분석 신뢰도 낮음({analysis.confidence:.2f}), 사용자 확인 필요")
                path.append(PipelineState.NEEDS_CONFIRMATION)
                return AwaitingConfirmation(
                    result=TransformResult(analysis=analysis, needs_confirmation=True, model_used=model),
                    path=path,
                )

            if analysis is not None:
                ctx = self.settings_from_analysis(request, analysis)
            else:
                ctx = self.fallback_settings(request)
        else:
            ctx = self.fallback_settings(request)

        path.append(PipelineState.TRANSFORMING)
        logger.info(f"2단계 변환 시작: {model} ({ctx.purpose.value}/{ctx.intent.value}/{ctx.politeness})")
        try:
            result = await self.transform(request, ctx, analysis)
        except LLMAPIError as e:
            logger.error(f"2단계 변환 실패: {e.message}")
            path.append(PipelineState.FAILED)
            return Failed(error=LLMAPIError(), path=path)

        self.gate.increment_usage(request.model, client_id)
        path.append(PipelineState.DONE)
        elapsed_ms = (time.time() - start_time) * 1000
        logger.info(f"변환 완료: {model} | 소요시간: {elapsed_ms:.0f}ms")
        return Completed(result=result, path=path, used_fallback=used_fallback)


# 전역 오케스트레이터 인스턴스
orchestrator = TransformOrchestrator(llm_client, usage_gate, prompt_builder)
