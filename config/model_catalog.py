"""모델 카탈로그 (티어/비용 안내용)"""

from models.common import ModelName, UserTier

MODEL_INFO = {
    ModelName.GPT_4O_MINI: {
        "name": "GPT-4o Mini",
        "description": "빠르고 효율적인 표준 모델",
        "tier": UserTier.FREE,
        "cost": "무료",
        "speed": "빠름",
        "quality": "표준",
    },
    ModelName.GPT_4O: {
        "name": "GPT-4o",
        "description": "최고 품질의 프리미엄 모델",
        "tier": UserTier.PREMIUM,
        "cost": "프리미엄",
        "speed": "느림",
        "quality": "최고",
    },
}

# 1M 토큰당 USD (데모 안내용)
COST_INFO = {
    ModelName.GPT_4O_MINI: {"input_cost": 0.15, "output_cost": 0.6, "typical": "~$0.001/request"},
    ModelName.GPT_4O: {"input_cost": 5.0, "output_cost": 15.0, "typical": "~$0.02/request"},
}

# 코드에 고정된 데모 프리미엄 키 (PREMIUM_KEYS 환경변수와 합쳐서 사용)
DEMO_PREMIUM_KEYS = ("premium_demo_2024", "dev_premium_123", "early_access_key")
