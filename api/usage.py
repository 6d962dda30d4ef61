from typing import Optional
from fastapi import APIRouter, Header, Query

from config.model_catalog import COST_INFO, MODEL_INFO
from config.settings import settings
from core.orchestrator import orchestrator
from core.usage_gate import DEFAULT_CLIENT_ID
from models.common import ModelName
from models.response import ApiSuccess, UsageReport
from utils.exceptions import AuthorizationError

router = APIRouter(prefix="/api", tags=["usage"])


@router.get(
    "/usage",
    response_model=ApiSuccess[UsageReport],
    summary="모델별 오늘 남은 사용 횟수",
)
async def get_usage(
    model: ModelName = Query(default=ModelName.GPT_4O_MINI),
    x_premium_key: Optional[str] = Header(default=None),
    x_client_id: Optional[str] = Header(default=None),
):
    gate = orchestrator.gate
    tier = gate.tier(x_premium_key)
    usage = gate.check_usage_limit(model, tier, x_client_id or DEFAULT_CLIENT_ID)
    return ApiSuccess[UsageReport](data=UsageReport(
        tier=tier,
        model=model.value,
        allowed=gate.can_use_model(model, tier),
        usage=usage,
    ))


@router.delete("/usage", summary="사용량 초기화 (개발 모드 전용)")
async def reset_usage(x_client_id: Optional[str] = Header(default=None)):
    if not settings.debug:
        raise AuthorizationError("개발 모드에서만 사용할 수 있습니다.")
    removed = orchestrator.gate.reset_usage(x_client_id or DEFAULT_CLIENT_ID)
    return {"ok": True, "data": {"removed": removed}}


@router.get("/models", summary="모델 카탈로그")
async def list_models():
    return {
        "ok": True,
        "data": [
            {"model": model.value, **info, "tier": info["tier"].value, "pricing": COST_INFO[model]}
            for model, info in MODEL_INFO.items()
        ],
    }
