from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ExperienceLevel = Literal["all", "0-2", "3-5", "5+"]


class DateRange(BaseModel):
    """Optional calendar bounds for submission dates."""

    start: date | None = None
    end: date | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None


class FilterCriteria(BaseModel):
    """User-chosen filter parameters for the candidates view."""

    experience_levels: frozenset[ExperienceLevel] = frozenset({"all"})
    search_query: str = ""
    rating_min: float = Field(default=0.0, ge=0)
    date_range: DateRange = Field(default_factory=DateRange)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("experience_levels", mode="before")
    @classmethod
    def _coerce_levels(cls, value):
        if isinstance(value, str):
            value = [value]
        return frozenset(value or ())

    @property
    def all_experience_levels(self) -> bool:
        return "all" in self.experience_levels
