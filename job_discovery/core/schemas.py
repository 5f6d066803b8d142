"""Core data models for the job discovery engine.

Jobs and bids are snapshots owned by the backend; the engine only reads them.
Field validators are lenient on optional data: bad coordinates, junk tags,
unknown statuses, null flags and unparseable timestamps collapse to
defaults. Identity fields and bid amounts stay strict.
"""

import math
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_CATEGORY = "general"

JobStatus = Literal["draft", "open", "in_progress", "completed", "cancelled"]
BidStatus = Literal["pending", "accepted", "rejected"]


def parse_timestamp(value: Any) -> datetime | None:
    """Best-effort conversion of a raw timestamp into a datetime.

    Accepts datetimes, dates, ISO-8601 strings and epoch milliseconds.
    Anything else yields None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


class Coordinate(BaseModel):
    """A point on the globe, in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class JobLocation(BaseModel):
    """Where a job takes place. Every field is optional."""

    model_config = ConfigDict(frozen=True)

    latitude: float | None = None
    longitude: float | None = None
    city: str | None = None
    state: str | None = None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def numeric_or_none(cls, v: Any) -> float | None:
        return _as_float(v)

    @field_validator("city", "state", mode="before")
    @classmethod
    def string_or_none(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None

    @property
    def coordinate(self) -> Coordinate | None:
        """The location as a Coordinate, or None unless both parts are finite."""
        if self.latitude is None or self.longitude is None:
            return None
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            return None
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class Job(BaseModel):
    """A job posting as delivered by the job listing source.

    Frozen: the engine never mutates a job, derived data lives on AnnotatedJob.
    Accepts both snake_case and the camelCase keys used by the web API.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    title: str = ""
    description: str = ""
    status: JobStatus = "open"
    budget: float | None = None
    location: JobLocation | None = None
    category_tags: list[str] = Field(default_factory=list, alias="categoryTags")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    deadline: datetime | None = None
    start_date: datetime | None = Field(default=None, alias="startDate")
    is_urgent: bool = Field(default=False, alias="isUrgent")

    @field_validator("title", "description", mode="before")
    @classmethod
    def text_or_empty(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("status", mode="before")
    @classmethod
    def known_status_or_open(cls, v: Any) -> str:
        return v if v in get_args(JobStatus) else "open"

    @field_validator("budget", mode="before")
    @classmethod
    def numeric_budget_or_none(cls, v: Any) -> float | None:
        return _as_float(v)

    @field_validator("is_urgent", mode="before")
    @classmethod
    def urgent_flag(cls, v: Any) -> bool:
        return v if isinstance(v, bool) else False

    @field_validator("location", mode="before")
    @classmethod
    def location_mapping_only(cls, v: Any) -> Any:
        if isinstance(v, (JobLocation, Mapping)):
            return v
        return None

    @field_validator("category_tags", mode="before")
    @classmethod
    def string_tags_only(cls, v: Any) -> list[str]:
        if not isinstance(v, (list, tuple)):
            return []
        return [tag for tag in v if isinstance(tag, str)]

    @field_validator("created_at", "deadline", "start_date", mode="before")
    @classmethod
    def lenient_timestamp(cls, v: Any) -> datetime | None:
        return parse_timestamp(v)

    @property
    def primary_category(self) -> str:
        """First category tag, or the general category when the job has none."""
        return self.category_tags[0] if self.category_tags else DEFAULT_CATEGORY


class Bid(BaseModel):
    """A contractor's bid on a job."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    job_id: int = Field(alias="jobId")
    amount: float
    status: BidStatus = "pending"
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("status", mode="before")
    @classmethod
    def known_status_or_pending(cls, v: Any) -> str:
        return v if v in get_args(BidStatus) else "pending"

    @field_validator("created_at", mode="before")
    @classmethod
    def lenient_timestamp(cls, v: Any) -> datetime | None:
        return parse_timestamp(v)


class BidStats(BaseModel):
    """Bidding activity on a single job.

    Amounts are None exactly when there are no bids, never zero.
    """

    model_config = ConfigDict(frozen=True)

    count: int = Field(default=0, ge=0)
    min_amount: float | None = None
    max_amount: float | None = None
    avg_amount: float | None = None

    @model_validator(mode="after")
    def amounts_null_iff_empty(self) -> "BidStats":
        amounts = (self.min_amount, self.max_amount, self.avg_amount)
        if self.count == 0 and any(a is not None for a in amounts):
            msg = "bid amounts must be null when count is 0"
            raise ValueError(msg)
        if self.count > 0 and any(a is None for a in amounts):
            msg = "bid amounts are required when count is positive"
            raise ValueError(msg)
        return self


class AnnotatedJob(BaseModel):
    """A Job paired with its derived, non-persisted discovery data."""

    model_config = ConfigDict(frozen=True)

    job: Job
    bid_stats: BidStats = Field(default_factory=BidStats)
    distance_km: float | None = Field(default=None, ge=0.0)
