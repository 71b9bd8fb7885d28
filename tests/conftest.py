import pytest

from glm_plan_usage.models import QuotaUsage, UsageStats


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def glm_env(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_AUTH_TOKEN", "test-token")
    monkeypatch.delenv("ANTHROPIC_BASE_URL", raising=False)


@pytest.fixture
def sample_quota_response():
    return {
        "code": 200,
        "msg": "操作成功",
        "data": {
            "limits": [
                {
                    "type": "TOKENS_LIMIT",
                    "unit": 3,
                    "number": 5,
                    "usage": 1000000,
                    "currentValue": 250000,
                    "percentage": 25,
                    "nextResetTime": 1769776934422,
                },
                {
                    "type": "TIME_LIMIT",
                    "unit": 5,
                    "number": 1,
                    "usage": 100,
                    "currentValue": 92,
                    "remaining": 8,
                    "percentage": 92,
                    "nextResetTime": 1769776934422,
                    "usageDetails": [
                        {"modelCode": "search-prime", "usage": 83},
                        {"modelCode": "web-reader", "usage": 9},
                    ],
                },
            ],
            "level": "lite",
        },
        "success": True,
    }


@pytest.fixture
def usage_stats():
    return UsageStats(
        token_usage=QuotaUsage(
            used=250000, limit=1000000, percentage=25, time_window="5h", reset_at=None
        ),
        tool_usage=QuotaUsage(used=12, limit=100, percentage=12, time_window="30d"),
    )
