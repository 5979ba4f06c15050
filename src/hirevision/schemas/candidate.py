from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CandidateDetails(BaseModel):
    """Structured candidate profile attached to a submission."""

    full_name: str | None = None
    email: str | None = None
    experience: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)


class CandidateRecord(BaseModel):
    """One candidate's interview submission as fetched from the store."""

    id: str
    title: str = ""
    candidate_details: CandidateDetails | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    @property
    def timestamp(self) -> datetime | None:
        """Submission time used for date filtering."""
        if self.created_at is not None:
            return self.created_at
        if self.candidate_details is not None:
            return self.candidate_details.created_at
        return None
