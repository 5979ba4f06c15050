from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class InterviewOwner(BaseModel):
    """Embedded owner reference returned alongside a question."""

    recruiter_id: str | None = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class Interview(BaseModel):
    """Interview owned by a recruiter."""

    id: str
    recruiter_id: str | None = None
    title: str | None = None
    description: str | None = None
    invite_code: int | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class InterviewQuestion(BaseModel):
    """Question attached to exactly one interview."""

    id: str
    question: str
    order_index: int | None = None
    interview_id: str
    interview: InterviewOwner | None = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    def belongs_to(self, recruiter_id: str) -> bool:
        return self.interview is not None and self.interview.recruiter_id == recruiter_id
