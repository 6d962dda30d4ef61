"""프롬프트 템플릿 빌더"""

from typing import Dict, Optional

from config import policies
from config.prompts import (
    ANALYSIS_SCHEMA_LITERAL,
    ANALYSIS_SYSTEM_PROMPT,
    ANALYSIS_NOTES_TEMPLATE,
    ANALYSIS_USER_TEMPLATE,
    CONFIRMED_ANALYSIS_NOTE,
    ENHANCED_SYSTEM_SUFFIX,
    ENHANCED_USER_TEMPLATE,
    TRANSFORM_SCHEMA_LITERAL,
    TRANSFORM_USER_TEMPLATE,
)
from config.settings import settings
from models.common import AnalysisResult, TonePreset
from models.internal import PromptPair, TransformSettings
from utils.logging import logger


def fill_template(template: str, variables: Dict[str, object]) -> str:
    """{var_name} 형태의 자리표시자를 치환 (JSON 중괄호는 그대로 둔다)"""
    result = template
    for var_name, var_value in variables.items():
        result = result.replace(f"{{{var_name}}}", str(var_value))
    return result


def resolve_tone_preset(value: Optional[str]) -> TonePreset:
    """알 수 없는 프리셋 이름은 default로 처리"""
    try:
        return TonePreset(value or TonePreset.DEFAULT.value)
    except ValueError:
        logger.warning(f"알 수 없는 톤 프리셋: {value}, default 사용")
        return TonePreset.DEFAULT


class PromptBuilder:
    """LLM 프롬프트 구성 클래스"""

    def __init__(self, confidence_threshold: Optional[float] = None):
        self.confidence_threshold = (
            settings.confidence_threshold if confidence_threshold is None else confidence_threshold
        )

    def build_analysis_prompt(self, text: str) -> PromptPair:
        """
        1단계(분석)용 시스템/유저 프롬프트 구성

        Args:
            text: 분석할 원문

        Returns:
            시스템/유저 프롬프트 쌍
        """
        threshold = f"{self.confidence_threshold:g}"
        system = fill_template(ANALYSIS_SYSTEM_PROMPT, {"var_threshold": threshold})
        user = fill_template(ANALYSIS_USER_TEMPLATE, {
            "var_schema": ANALYSIS_SCHEMA_LITERAL,
            "var_threshold": threshold,
            "var_text": text,
        })
        return PromptPair(system=system, user=user)

    def build_system_prompt(self, ctx: TransformSettings) -> str:
        """정책 테이블 조각을 정해진 순서로 이어 붙인 변환용 시스템 프롬프트"""
        prefer, avoid = policies.PHRASE_BANK[ctx.intent]
        sections = [
            policies.ROLE_FRAMING[ctx.language],
            policies.POLITENESS_RULES[ctx.politeness],
            policies.PURPOSE_LAYOUTS[ctx.purpose],
            policies.INTENT_HINTS[ctx.intent],
            policies.TONE_PRESET_RULES[ctx.tone_preset],
            f"선호 표현: {', '.join(prefer)}",
            f"금칙 표현: {', '.join(avoid)}",
            policies.NO_EXPOSED_REASONING,
            policies.INVARIANTS[ctx.language],
            policies.INJECTION_GUARDS[ctx.language],
            policies.FEW_SHOT[ctx.language],
        ]
        return "\n".join(sections)

    def build_transform_prompt(
        self,
        text: str,
        ctx: TransformSettings,
        analysis: Optional[AnalysisResult] = None,
        confirmed: bool = False,
    ) -> PromptPair:
        """
        2단계(변환)용 프롬프트 구성

        analysis가 주어지면 분석 결과 요약을 덧붙인 enhanced 변형을 만든다.
        confirmed=True(클라이언트가 보낸 분석)이면 감정/근거 문자열은
        시스템 프롬프트에 넣지 않는다.

        Args:
            text: 변환할 원문
            ctx: 확정된 변환 설정
            analysis: 1단계 분석 결과 (선택)
            confirmed: analysis가 사용자 확인 요청 본문에서 왔는지 여부

        Returns:
            시스템/유저 프롬프트 쌍
        """
        try:
            system = self.build_system_prompt(ctx)

            if analysis is None:
                user = fill_template(TRANSFORM_USER_TEMPLATE, {
                    "var_schema": TRANSFORM_SCHEMA_LITERAL,
                    "var_text": text,
                })
                return PromptPair(system=system, user=user)

            if confirmed:
                notes = CONFIRMED_ANALYSIS_NOTE
            else:
                detail = analysis.analysis
                notes = fill_template(ANALYSIS_NOTES_TEMPLATE, {
                    "var_emotions": ", ".join(detail.detected_emotions) or "없음",
                    "var_intensity": detail.emotion_intensity.value,
                    "var_reasoning": detail.reasoning,
                })
            system += fill_template(ENHANCED_SYSTEM_SUFFIX, {"var_analysis_notes": notes})
            user = fill_template(ENHANCED_USER_TEMPLATE, {
                "var_purpose": ctx.purpose.value,
                "var_intent": ctx.intent.value,
                "var_politeness": ctx.politeness,
                "var_confidence": round(analysis.confidence * 100),
                "var_length_limit": policies.PURPOSE_LENGTH_LIMITS.get(ctx.purpose, policies.DEFAULT_LENGTH_LIMIT),
                "var_schema": TRANSFORM_SCHEMA_LITERAL,
                "var_text": text,
            })
            return PromptPair(system=system, user=user)
        except KeyError as e:
            logger.error(f"변환 프롬프트 생성 실패 (정책 테이블에 없는 값): {e}")
            raise


# 전역 프롬프트 빌더 인스턴스
prompt_builder = PromptBuilder()
