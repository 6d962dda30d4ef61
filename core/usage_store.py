"""모델별 일일 사용량 저장소

게이트에 주입되는 저장소. 키는 "<client_id>:<model>" 형식이고
값은 {"date": "YYYY-MM-DD", "used": n} 이다.
"""

import json
import threading
from pathlib import Path
from typing import Dict, Optional

from models.internal import UsageCounter
from utils.logging import logger


def usage_key(client_id: str, model: str) -> str:
    return f"{client_id}:{model}"


class UsageStore:
    """사용량 저장소 인터페이스"""

    def read(self, key: str) -> Optional[UsageCounter]:
        raise NotImplementedError

    def write(self, key: str, counter: UsageCounter) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError


class InMemoryUsageStore(UsageStore):
    """프로세스 메모리 저장소 (테스트/단일 워커용)"""

    def __init__(self):
        self._data: Dict[str, UsageCounter] = {}

    def read(self, key: str) -> Optional[UsageCounter]:
        return self._data.get(key)

    def write(self, key: str, counter: UsageCounter) -> None:
        self._data[key] = counter

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None


class JsonFileUsageStore(UsageStore):
    """JSON 파일 저장소. 파일이 없거나 깨져 있으면 빈 상태로 본다."""

    def __init__(self, path: str):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, dict]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("사용량 파일 형식이 올바르지 않습니다")
        return data

    def _save(self, data: Dict[str, dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
        tmp_path.replace(self.path)

    def read(self, key: str) -> Optional[UsageCounter]:
        with self._lock:
            raw = self._load().get(key)
        if raw is None:
            return None
        return UsageCounter(date=str(raw["date"]), used=int(raw.get("used", 0)))

    def write(self, key: str, counter: UsageCounter) -> None:
        with self._lock:
            try:
                data = self._load()
            except (OSError, ValueError) as e:
                logger.warning(f"사용량 파일을 읽을 수 없어 새로 작성합니다: {e}")
                data = {}
            data[key] = {"date": counter.date, "used": counter.used}
            self._save(data)

    def delete(self, key: str) -> bool:
        with self._lock:
            data = self._load()
            if key not in data:
                return False
            del data[key]
            self._save(data)
        return True
