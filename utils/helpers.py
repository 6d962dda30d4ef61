"""유틸리티 헬퍼 함수들"""

import json
import re
import secrets
import string
import time
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from utils.logging import logger

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_ID_ALPHABET = string.ascii_lowercase + string.digits


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    LLM 응답에서 JSON 객체를 추출합니다.

    코드펜스(```json)를 벗기고 그대로 파싱을 시도한 뒤,
    실패하면 첫 '{'부터 마지막 '}'까지를 다시 파싱합니다.

    Args:
        text: LLM 응답 텍스트

    Returns:
        파싱된 사전, 객체가 아니거나 실패하면 None
    """
    if not text or not text.strip():
        return None

    cleaned = _CODE_FENCE.sub("", text.strip())
    candidates = [cleaned]
    start, end = cleaned.find("{"), cleaned.rfind("}")
    if 0 <= start < end:
        candidates.append(cleaned[start:end + 1])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


def generate_feedback_id() -> str:
    """fb_<epoch ms>_<9자리 랜덤> 형식의 피드백 ID"""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"fb_{int(time.time() * 1000)}_{suffix}"


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def utc_now_iso() -> str:
    """밀리초 단위 ISO-8601 UTC 시각 (예: 2024-05-01T09:30:00.123Z)"""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def parse_timestamp(value: Any) -> float:
    """정렬용 타임스탬프 변환. 해석할 수 없으면 0"""
    if not isinstance(value, str) or not value:
        return 0.0
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()
    except ValueError:
        logger.warning(f"잘못된 타임스탬프: {value}")
        return 0.0
