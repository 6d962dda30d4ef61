from typing import Optional
from fastapi import APIRouter, Query, Request

from core.feedback_logger import feedback_logger
from models.common import Rating
from models.request import FeedbackRequest
from models.response import ApiSuccess, FeedbackPage, FeedbackReceipt
from utils.logging import logger

router = APIRouter(prefix="/api", tags=["feedback"])


def requester_metadata(http_request: Request) -> dict:
    """요청자 메타데이터 (User-Agent, 프록시 경유 IP)"""
    headers = http_request.headers
    ip = headers.get("x-forwarded-for") or headers.get("x-real-ip")
    if not ip:
        ip = http_request.client.host if http_request.client else "unknown"
    return {"userAgent": headers.get("user-agent", ""), "ip": ip}


@router.post(
    "/feedback",
    response_model=ApiSuccess[FeedbackReceipt],
    summary="변환 결과 피드백 제출",
)
async def submit_feedback(feedback: FeedbackRequest, http_request: Request):
    # 검증은 모델로 하고, 기록은 제출된 JSON 그대로
    raw = await http_request.json()
    feedback_id = feedback_logger.submit(feedback, requester_metadata(http_request), raw=raw)
    return ApiSuccess[FeedbackReceipt](
        data=FeedbackReceipt(feedback_id=feedback_id, message="피드백이 성공적으로 저장되었습니다.")
    )


@router.get(
    "/feedback",
    response_model=ApiSuccess[FeedbackPage],
    summary="피드백 조회 (관리자)",
)
async def list_feedback(
    limit: int = Query(default=50, ge=0),
    rating: Optional[Rating] = Query(default=None),
    key: Optional[str] = Query(default=None),
):
    page = feedback_logger.list(admin_key=key, rating=rating, limit=limit)
    logger.info(f"피드백 조회: 전체={page.total}, 반환={len(page.feedbacks)}")
    return ApiSuccess[FeedbackPage](data=page)
