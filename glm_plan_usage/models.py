from pydantic import BaseModel, ConfigDict, Field, field_validator


class QuotaUsage(BaseModel):
    """Usage of a single quota window."""
    model_config = ConfigDict(frozen=True)

    used: int
    limit: int
    percentage: int
    time_window: str
    # unix seconds
    reset_at: int | None = None

    @field_validator("percentage")
    @classmethod
    def _clamp_percentage(cls, value: int) -> int:
        return max(0, min(100, value))


class UsageStats(BaseModel):
    """Token (5h) and tool (30d) quota usage."""
    model_config = ConfigDict(frozen=True)

    token_usage: QuotaUsage | None = None
    tool_usage: QuotaUsage | None = None


class QuotaLimitItem(BaseModel):
    """A single entry of the quota limit response."""
    quota_type: str = Field(alias="type")
    usage: int = 0
    current_value: int = Field(default=0, alias="currentValue")
    percentage: int
    next_reset_time: int | None = Field(default=None, alias="nextResetTime")


class QuotaLimitData(BaseModel):
    limits: list[QuotaLimitItem] = []


class QuotaLimitStatus(BaseModel):
    """Status fields of the quota limit envelope."""
    code: int = 0
    msg: str = ""
    success: bool


class QuotaLimitResponse(QuotaLimitStatus):
    """Envelope returned by /monitor/usage/quota/limit."""
    data: QuotaLimitData = Field(default_factory=QuotaLimitData)


class ModelInfo(BaseModel):
    id: str
    display_name: str | None = None


class WorkspaceInfo(BaseModel):
    current_dir: str | None = None


class CostInfo(BaseModel):
    tokens: float | None = None
    cost: float | None = None


class InputData(BaseModel):
    """Session data passed by the host on stdin."""
    model: ModelInfo | None = None
    workspace: WorkspaceInfo | None = None
    transcript_path: str | None = None
    cost: CostInfo | None = None
