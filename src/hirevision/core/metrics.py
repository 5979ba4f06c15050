"""Derived overview metrics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..schemas import CandidateRecord
from .filters import EXPERIENCE_BUCKETS, derive_rating, experience_bucket, parse_experience_years

DEFAULT_IN_PROGRESS_PERCENT = 60
UNKNOWN_BUCKET = "unknown"


@dataclass(slots=True, frozen=True)
class DerivedMetrics:
    """Summary numbers for the overview tab.

    ``applicants_in_progress`` and ``average_rating`` are presentation
    heuristics, not per-record state.
    """

    total_applicants: int
    applicants_in_progress: int
    experience_distribution: dict[str, int] = field(default_factory=dict)
    average_rating: float | None = None


def estimate_in_progress(total: int, percent: int = DEFAULT_IN_PROGRESS_PERCENT) -> int:
    """Fixed share of ``total``, rounded down."""
    return total * percent // 100


def experience_distribution(records: Sequence[CandidateRecord]) -> dict[str, int]:
    counts = {label: 0 for label, _, _ in EXPERIENCE_BUCKETS}
    counts[UNKNOWN_BUCKET] = 0
    for record in records:
        details = record.candidate_details
        bucket = experience_bucket(
            parse_experience_years(details.experience if details else None)
        )
        counts[bucket or UNKNOWN_BUCKET] += 1
    return counts


def compute_metrics(
    records: Sequence[CandidateRecord],
    *,
    in_progress_percent: int = DEFAULT_IN_PROGRESS_PERCENT,
) -> DerivedMetrics:
    total = len(records)
    average_rating = (
        sum(derive_rating(record.id) for record in records) / total if total else None
    )
    return DerivedMetrics(
        total_applicants=total,
        applicants_in_progress=estimate_in_progress(total, in_progress_percent),
        experience_distribution=experience_distribution(records),
        average_rating=average_rating,
    )
