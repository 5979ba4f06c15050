from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Signed-in recruiter as reported by the auth service."""

    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @property
    def full_name(self) -> str | None:
        name = self.user_metadata.get("full_name") or self.user_metadata.get("name")
        return str(name) if name else None

    @property
    def first_name(self) -> str:
        return (self.full_name or "there").split(" ")[0]
