"""Configuration models and YAML loader for the job discovery engine."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from job_discovery.core.categories import ALL_CATEGORIES_VALUE
from job_discovery.core.schemas import Coordinate

SortKey = Literal["default", "price", "date", "category", "title", "location"]
SortDirection = Literal["asc", "desc"]

DEFAULT_SERVICE_RADIUS_KM = 25.0
MAX_SERVICE_RADIUS_KM = 100.0


class SearchContext(BaseModel):
    """Free-text query and category filter.

    Blank values match everything. The "all" category is the same as blank.
    """

    model_config = ConfigDict(frozen=True)

    query: str = ""
    category: str = ""

    @field_validator("query", "category", mode="before")
    @classmethod
    def strip_or_blank(cls, v: Any, info: ValidationInfo) -> str:
        if v is None:
            return ""
        if not isinstance(v, str):
            msg = "search values must be strings"
            raise ValueError(msg)
        v = v.strip()
        if info.field_name == "category" and v.lower() == ALL_CATEGORIES_VALUE:
            return ""
        return v

    @property
    def is_wildcard(self) -> bool:
        return not self.query and not self.category


class ServiceAreaContext(BaseModel):
    """A contractor's service area: a disc around ``center``.

    An active area without a center filters nothing.
    """

    model_config = ConfigDict(frozen=True)

    center: Coordinate | None = None
    radius_km: float = Field(
        default=DEFAULT_SERVICE_RADIUS_KM, ge=0.0, le=MAX_SERVICE_RADIUS_KM,
    )
    active: bool = False

    @field_validator("center")
    @classmethod
    def center_in_bounds(cls, v: Coordinate | None) -> Coordinate | None:
        if v is None:
            return v
        if not -90.0 <= v.latitude <= 90.0:
            msg = f"center latitude out of range: {v.latitude}"
            raise ValueError(msg)
        if not -180.0 <= v.longitude <= 180.0:
            msg = f"center longitude out of range: {v.longitude}"
            raise ValueError(msg)
        return v


class SortState(BaseModel):
    """Sort key and direction chosen by the caller."""

    model_config = ConfigDict(frozen=True)

    key: SortKey = "default"
    direction: SortDirection = "asc"


class DataConfig(BaseModel):
    """Default locations of the job and bid listings."""

    jobs_path: str = "data/jobs.json"
    bids_path: str = "data/bids.json"


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    data: DataConfig = Field(default_factory=DataConfig)
    search: SearchContext = Field(default_factory=SearchContext)
    service_area: ServiceAreaContext = Field(default_factory=ServiceAreaContext)
    sort: SortState = Field(default_factory=SortState)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
