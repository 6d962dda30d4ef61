# tests/helpers.py
import json


class FakeLLM:
    """순서대로 준비된 응답을 돌려주는 생성 서비스 대역"""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    async def generate(self, model, messages, output_schema=None, temperature=None):
        self.calls.append({"model": model, "messages": messages, "output_schema": output_schema})
        if not self.responses:
            raise AssertionError("준비되지 않은 LLM 호출")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def schemas(self):
        return [call["output_schema"] for call in self.calls]


def analysis_json(confidence=0.85, purpose="messenger", intent="request", politeness=2, **extra):
    payload = {
        "purpose": purpose,
        "intent": intent,
        "politeness": politeness,
        "confidence": confidence,
        "analysis": {
            "detectedEmotions": ["짜증", "조급함"],
            "emotionIntensity": "high",
            "contextClues": ["늦게", "?!"],
            "reasoning": "지연에 대한 불만을 표현하며 빠른 처리를 요청함",
        },
    }
    payload.update(extra)
    return json.dumps(payload, ensure_ascii=False)


def transform_json(revision="혹시 진행 상황을 공유해주실 수 있을까요?", **extra):
    payload = {
        "revision": revision,
        "tips": ["질문형으로 부드럽게 요청했습니다."],
        "subject": "",
        "summary": "진행 상황 공유 요청",
    }
    payload.update(extra)
    return json.dumps(payload, ensure_ascii=False)
