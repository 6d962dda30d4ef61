"""서비스 공용 로거 (tone_api)"""

import logging
import sys
from typing import Optional

from config.settings import settings

LOGGER_NAME = "tone_api"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    tone_api 로거를 설정합니다. 여러 번 호출해도 stdout 핸들러는 하나만 유지한다.

    Args:
        level: 로그 레벨 이름 (없으면 settings.log_level)

    Returns:
        설정된 로거
    """
    resolved = logging.getLevelName((level or settings.log_level).upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)

    handler = next((h for h in logger.handlers if getattr(h, "_tone_api", False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._tone_api = True
        logger.addHandler(handler)
    handler.setLevel(resolved)

    return logger


logger = setup_logging()
