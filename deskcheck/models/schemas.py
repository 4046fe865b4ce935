from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RunState(str, Enum):
    INIT = "init"
    AUTHENTICATING = "authenticating"
    NAVIGATING = "navigating"
    CHECKING_DATES = "checking_dates"
    REPORTING = "reporting"
    LOGGING_OUT = "logging_out"
    DONE = "done"
    FAILED = "failed"


class AvailabilityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_date: date = Field(..., description="The calendar day that was checked")
    is_available: bool = False
    desks_count: int | None = Field(
        default=None, ge=0, description="Number of free desks, None when the count is unknown"
    )

    @classmethod
    def unavailable(cls, target_date: date) -> "AvailabilityResult":
        return cls(target_date=target_date, is_available=False)

    @classmethod
    def from_desk_count(cls, target_date: date, desks_count: int) -> "AvailabilityResult":
        return cls(target_date=target_date, is_available=desks_count > 0, desks_count=desks_count)
