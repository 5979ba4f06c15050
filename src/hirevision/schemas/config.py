"""Pydantic configuration schema for the dashboard YAML input."""

from __future__ import annotations

from typing import Any

import pendulum
from pendulum.tz.exceptions import InvalidTimezone
from pydantic import BaseModel, Field, ValidationError, field_validator


class TableNames(BaseModel):
    candidates: str = "interview_videos"
    interviews: str = "interview"
    questions: str = "interview_questions"
    recruiters: str = "recruiters"


class DataStoreConfig(BaseModel):
    url: str = "http://localhost:54321"
    api_key: str | None = None
    access_token: str | None = None
    timeout: float = 10.0
    tables: TableNames = Field(default_factory=TableNames)


class ChatConfig(BaseModel):
    base_url: str = "http://localhost:8000"
    timeout: float = 30.0


class DashboardConfig(BaseModel):
    in_progress_percent: int = Field(default=60, ge=0, le=100)
    timezone: str = "UTC"
    top_applicants: list[str] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            pendulum.timezone(value)
        except InvalidTimezone as exc:
            raise ValueError(f"unknown timezone: {value}") from exc
        return value


class AppConfig(BaseModel):
    data_store: DataStoreConfig = Field(default_factory=DataStoreConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)
    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)

    def to_settings(self) -> dict[str, Any]:
        return self.model_dump(mode="python")


ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "HIREVISION_DATA_STORE_URL": ("data_store", "url"),
    "HIREVISION_DATA_STORE_KEY": ("data_store", "api_key"),
    "HIREVISION_ACCESS_TOKEN": ("data_store", "access_token"),
    "HIREVISION_BACKEND_URL": ("chat", "base_url"),
}


def load_config(raw: Any, *, environ: dict[str, str] | None = None) -> AppConfig:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    merged: dict[str, Any] = {
        section: dict(values) if isinstance(values, dict) else values
        for section, values in raw.items()
    }
    for variable, (section, key) in ENV_OVERRIDES.items():
        value = (environ or {}).get(variable)
        if value and isinstance(merged.setdefault(section, {}), dict):
            merged[section][key] = value
    return AppConfig.model_validate(merged)
