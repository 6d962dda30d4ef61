# tests/conftest.py
from datetime import date

import pytest

from core.feedback_logger import FeedbackLogger
from core.llm.prompt_builder import PromptBuilder
from core.orchestrator import TransformOrchestrator
from core.usage_gate import UsageGate
from core.usage_store import InMemoryUsageStore
from tests.helpers import FakeLLM

TODAY = date(2024, 5, 1)


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def usage_store():
    return InMemoryUsageStore()


@pytest.fixture
def gate(usage_store):
    return UsageGate(
        store=usage_store,
        premium_keys=["test_premium_key"],
        usage_limits={"free": {"gpt-4o-mini": 5}, "premium": {"gpt-4o-mini": 50, "gpt-4o": 10}},
        today=lambda: TODAY,
    )


@pytest.fixture
def orchestrator(fake_llm, gate):
    return TransformOrchestrator(fake_llm, gate, PromptBuilder(confidence_threshold=0.7), confidence_threshold=0.7)


@pytest.fixture
def feedback_log(tmp_path):
    return FeedbackLogger(path=str(tmp_path / "feedback" / "feedback.jsonl"), admin_key="admin-secret")
