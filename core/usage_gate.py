import threading
from datetime import date
from typing import Callable, Dict, Iterable, Optional, Set

from config.model_catalog import DEMO_PREMIUM_KEYS, MODEL_INFO
from config.settings import settings
from core.usage_store import JsonFileUsageStore, UsageStore, usage_key
from models.common import ModelName, UserTier
from models.internal import UsageCounter
from models.response import UsageStatus
from utils.helpers import utc_today
from utils.logging import logger

DEFAULT_CLIENT_ID = "anonymous"


class UsageGate:
    """티어/모델 권한 및 일일 사용량 관리 클래스"""

    def __init__(
        self,
        store: UsageStore,
        premium_keys: Optional[Iterable[str]] = None,
        usage_limits: Optional[Dict[str, Dict[str, int]]] = None,
        today: Callable[[], date] = utc_today,
    ):
        self.store = store
        if premium_keys is None:
            premium_keys = [k.strip() for k in settings.premium_keys.split(",")]
        self.premium_keys: Set[str] = {k for k in premium_keys if k} | set(DEMO_PREMIUM_KEYS)
        self.usage_limits = usage_limits if usage_limits is not None else settings.usage_limits
        self.today = today
        self._lock = threading.Lock()

    def tier(self, premium_key: Optional[str]) -> UserTier:
        """프리미엄 키 검증. 키가 없거나 틀리면 free"""
        if premium_key and premium_key.strip() in self.premium_keys:
            return UserTier.PREMIUM
        return UserTier.FREE

    def can_use_model(self, model: ModelName, tier: UserTier) -> bool:
        """무료 모델은 누구나, 프리미엄 모델은 프리미엄 사용자만"""
        info = MODEL_INFO.get(ModelName(model))
        if info is None:
            return False
        if info["tier"] == UserTier.FREE:
            return True
        return tier == UserTier.PREMIUM

    def get_daily_limit(self, model: ModelName, tier: UserTier) -> Optional[int]:
        limits = self.usage_limits.get(UserTier(tier).value, {})
        return limits.get(ModelName(model).value)

    def _used_today(self, key: str) -> int:
        counter = self.store.read(key)
        if counter is None or counter.date != self.today().isoformat():
            return 0
        return max(0, counter.used)

    def check_usage_limit(
        self,
        model: ModelName,
        tier: UserTier,
        client_id: str = DEFAULT_CLIENT_ID,
    ) -> UsageStatus:
        """
        오늘 남은 사용 가능 횟수를 계산합니다.

        Args:
            model: 모델 이름
            tier: 사용자 티어
            client_id: 사용량 소유자 식별자

        Returns:
            사용 가능 여부, 남은 횟수, 일일 한도
        """
        limit = self.get_daily_limit(model, tier)
        if limit is None:
            return UsageStatus(can_use=False, remaining=0, limit=0)

        try:
            used = self._used_today(usage_key(client_id, ModelName(model).value))
        except Exception as e:
            # 저장소를 읽을 수 없으면 사용량 0으로 간주
            logger.warning(f"사용량 조회 실패, 0회로 간주: {e}")
            used = 0

        remaining = max(0, limit - used)
        return UsageStatus(can_use=remaining > 0, remaining=remaining, limit=limit)

    def increment_usage(self, model: ModelName, client_id: str = DEFAULT_CLIENT_ID) -> None:
        """오늘 사용량 1 증가. 저장된 날짜가 다르면 1부터 다시 센다."""
        key = usage_key(client_id, ModelName(model).value)
        today = self.today().isoformat()
        try:
            with self._lock:
                try:
                    counter = self.store.read(key)
                except Exception as e:
                    logger.warning(f"사용량 조회 실패, 새 카운터 사용: {e}")
                    counter = None

                if counter is not None and counter.date == today:
                    updated = UsageCounter(date=today, used=counter.used + 1)
                else:
                    updated = UsageCounter(date=today, used=1)
                self.store.write(key, updated)
        except Exception as e:
            logger.error(f"사용량 업데이트 실패: {e}")

    def reset_usage(self, client_id: str = DEFAULT_CLIENT_ID) -> int:
        """클라이언트의 모든 모델 사용량 삭제 (개발 모드 전용)"""
        removed = sum(1 for model in ModelName if self.store.delete(usage_key(client_id, model.value)))
        logger.info(f"사용량 초기화: client={client_id}, 삭제={removed}건")
        return removed


# 전역 사용량 게이트 인스턴스
usage_gate = UsageGate(store=JsonFileUsageStore(settings.usage_store_path))
