import json
import secrets
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from config.settings import settings
from models.common import Rating
from models.request import FeedbackRequest
from models.response import FeedbackPage, FeedbackStats
from utils.exceptions import AuthorizationError, FeedbackStorageError
from utils.helpers import generate_feedback_id, parse_timestamp, utc_now_iso
from utils.logging import logger


class FeedbackLogger:
    """JSONL 추가 전용 피드백 로그 (수정/삭제 없음)"""

    def __init__(self, path: Optional[str] = None, admin_key: Optional[str] = None):
        self.path = Path(path or settings.feedback_log_path)
        self.admin_key = settings.admin_key if admin_key is None else admin_key
        self._lock = threading.Lock()

    def submit(
        self,
        feedback: FeedbackRequest,
        requester: Optional[Dict[str, str]] = None,
        raw: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        피드백 한 건을 로그 끝에 추가합니다.

        raw가 있으면 검증된 모델을 다시 직렬화하지 않고 제출된 JSON을 그대로 기록한다.

        Args:
            feedback: 검증된 피드백 요청
            requester: 요청자 메타데이터 (userAgent, ip)
            raw: 클라이언트가 보낸 원본 JSON 객체

        Returns:
            생성된 feedbackId

        Raises:
            FeedbackStorageError: 파일 기록 실패 시
        """
        if raw is not None:
            record: Dict[str, Any] = dict(raw)
        else:
            record = feedback.model_dump(mode="json", by_alias=True, exclude_unset=True)
        record.update(requester or {})
        record["feedbackId"] = generate_feedback_id()
        record["timestamp"] = utc_now_iso()

        line = json.dumps(record, ensure_ascii=False) + "\n"
        try:
            with self._lock:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with self.path.open("a", encoding="utf-8") as f:
                    f.write(line)
        except OSError as e:
            logger.error(f"피드백 저장 오류: {e}")
            raise FeedbackStorageError()

        logger.info(f"피드백 수집: {record['rating']} - {record['feedbackId']}")
        return record["feedbackId"]

    def _read_all(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        records = []
        with self.path.open("r", encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning(f"피드백 로그 {line_no}행 파싱 실패, 건너뜀")
                    continue
                if isinstance(record, dict):
                    records.append(record)
        return records

    def verify_admin(self, admin_key: Optional[str]) -> None:
        """관리자 키 확인. 서버 키가 설정되지 않았으면 항상 거부"""
        if not self.admin_key or not admin_key:
            raise AuthorizationError()
        if not secrets.compare_digest(admin_key.encode("utf-8"), self.admin_key.encode("utf-8")):
            raise AuthorizationError()

    def list(
        self,
        admin_key: Optional[str],
        rating: Optional[Rating] = None,
        limit: int = 50,
    ) -> FeedbackPage:
        """
        관리자용 피드백 조회

        통계와 total은 전체 로그 기준이고, feedbacks는 rating 필터 후
        최신순으로 limit개만 반환한다.

        Raises:
            AuthorizationError: 관리자 키 불일치
            FeedbackStorageError: 로그 파일 읽기 실패
        """
        self.verify_admin(admin_key)

        try:
            records = self._read_all()
        except OSError as e:
            logger.error(f"피드백 조회 오류: {e}")
            raise FeedbackStorageError("피드백 조회 중 오류가 발생했습니다.")

        stats = FeedbackStats(
            satisfied=sum(1 for r in records if r.get("rating") == Rating.SATISFIED.value),
            needs_improvement=sum(1 for r in records if r.get("rating") == Rating.NEEDS_IMPROVEMENT.value),
        )

        filtered = records
        if rating is not None:
            filtered = [r for r in records if r.get("rating") == Rating(rating).value]
        filtered = sorted(filtered, key=lambda r: parse_timestamp(r.get("timestamp")), reverse=True)

        return FeedbackPage(feedbacks=filtered[:max(0, limit)], total=len(records), stats=stats)


# 전역 피드백 로거 인스턴스
feedback_logger = FeedbackLogger()
