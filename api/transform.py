from typing import Optional
from fastapi import APIRouter, Header

from core.orchestrator import orchestrator
from core.usage_gate import DEFAULT_CLIENT_ID
from models.common import UserTier
from models.internal import Failed
from models.request import TransformRequest
from models.response import ApiSuccess, TransformResult
from utils.logging import logger

router = APIRouter(prefix="/api", tags=["transform"])


@router.post(
    "/transform",
    response_model=ApiSuccess[TransformResult],
    summary="비즈니스 문장 변환",
    description="감정적인 문장을 비즈니스 문체로 변환합니다. 스마트 모드에서는 목적/의도/정중함을 먼저 분석합니다.",
)
async def transform_text(
    request: TransformRequest,
    x_premium_key: Optional[str] = Header(default=None),
    x_client_id: Optional[str] = Header(default=None),
):
    """
    변환 엔드포인트

    분석 신뢰도가 낮으면 needsConfirmation=true와 분석 결과만 반환하고,
    사용자가 확인한 분석 결과를 confirmedAnalysis로 다시 보내면 바로 변환한다.
    """
    tier = orchestrator.gate.tier(x_premium_key)
    if request.premium and tier == UserTier.FREE:
        logger.warning("premium=true 요청이지만 유효한 프리미엄 키가 없어 free 티어로 처리")

    outcome = await orchestrator.run(request, tier=tier, client_id=x_client_id or DEFAULT_CLIENT_ID)
    if isinstance(outcome, Failed):
        raise outcome.error

    return ApiSuccess[TransformResult](data=outcome.result)
