"""Data-backed dashboard services."""

from __future__ import annotations

from .candidates import CandidateRepository
from .job_description import JobDescriptionManager
from .questions import QuestionListManager

__all__ = ["CandidateRepository", "JobDescriptionManager", "QuestionListManager"]
