from __future__ import annotations

import pytest

from hirevision.core import compute_metrics, estimate_in_progress
from hirevision.schemas import CandidateRecord


def build_records(count: int, experience: str | None = "4 years") -> list[CandidateRecord]:
    return [
        CandidateRecord(
            id=f"a-{idx}",
            title=f"Candidate {idx}",
            candidate_details={"full_name": f"C{idx}", "experience": experience},
        )
        for idx in range(count)
    ]


def test_in_progress_is_sixty_percent_rounded_down():
    assert estimate_in_progress(10) == 6
    assert estimate_in_progress(7) == 4
    assert estimate_in_progress(1) == 0
    assert estimate_in_progress(0) == 0


def test_compute_metrics_counts_full_collection():
    metrics = compute_metrics(build_records(10))

    assert metrics.total_applicants == 10
    assert metrics.applicants_in_progress == 6
    assert metrics.experience_distribution == {"0-2": 0, "3-5": 10, "5+": 0, "unknown": 0}
    assert metrics.average_rating == pytest.approx(5.5)


def test_compute_metrics_respects_configured_share():
    metrics = compute_metrics(build_records(10), in_progress_percent=25)

    assert metrics.applicants_in_progress == 2


def test_empty_collection_has_no_average_rating():
    metrics = compute_metrics([])

    assert metrics.total_applicants == 0
    assert metrics.applicants_in_progress == 0
    assert metrics.average_rating is None


def test_unparseable_experience_lands_in_unknown_bucket():
    metrics = compute_metrics(build_records(3, experience="plenty"))

    assert metrics.experience_distribution["unknown"] == 3
