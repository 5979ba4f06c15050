"""Pydantic schema definitions for dashboard records."""

from __future__ import annotations

from .candidate import CandidateDetails, CandidateRecord
from .criteria import DateRange, ExperienceLevel, FilterCriteria
from .interview import Interview, InterviewOwner, InterviewQuestion
from .user import User

__all__ = [
    "CandidateDetails",
    "CandidateRecord",
    "DateRange",
    "ExperienceLevel",
    "FilterCriteria",
    "Interview",
    "InterviewOwner",
    "InterviewQuestion",
    "User",
]
