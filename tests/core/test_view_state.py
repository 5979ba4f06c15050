from __future__ import annotations

import asyncio
from datetime import date

import pytest
from pydantic import ValidationError

from hirevision.core import DashboardView, Tab, ViewStateController
from hirevision.errors import DataSourceError, FetchError
from hirevision.schemas import CandidateRecord, DateRange, FilterCriteria


def build_record(record_id: str, title: str, experience: str | None = None) -> CandidateRecord:
    return CandidateRecord(
        id=record_id,
        title=title,
        candidate_details={"full_name": title, "experience": experience},
    )


@pytest.fixture
def records() -> list[CandidateRecord]:
    return [
        build_record("a-1", "Backend Engineer", "2"),
        build_record("j-2", "Frontend Engineer", "4"),
        build_record("k-3", "Designer", "8"),
    ]


def test_defaults(records):
    controller = ViewStateController(records=records)

    assert controller.tab is Tab.OVERVIEW
    assert controller.criteria == FilterCriteria()
    assert controller.criteria.experience_levels == frozenset({"all"})
    assert controller.criteria.date_range.is_open
    assert controller.filtered_records == records
    assert controller.loading is False
    assert controller.error is None


def test_filter_update_re_derives_view_synchronously(records):
    controller = ViewStateController(records=records)
    views: list[DashboardView] = []
    controller.subscribe(views.append)

    controller.update_filter("search_query", "engineer")
    controller.update_filter("experience_levels", ["3-5"])

    assert [v.total_results for v in views] == [2, 1]
    assert [r.id for r in views[-1].records] == ["j-2"]
    assert views[-1].metrics.total_applicants == 3


def test_update_filter_validates_names_and_values(records):
    controller = ViewStateController(records=records)

    with pytest.raises(ValidationError):
        controller.update_filter("salary", 10)
    with pytest.raises(ValidationError):
        controller.update_filter("experience_levels", ["10+"])
    assert controller.criteria == FilterCriteria()


def test_reset_filters_restores_defaults(records):
    controller = ViewStateController(records=records)
    controller.update_filter("rating_min", 7)
    controller.update_filter("date_range", DateRange(start=date(2024, 1, 1)))

    controller.reset_filters()

    assert controller.criteria == FilterCriteria()
    assert controller.filtered_records == records


def test_tab_is_a_closed_set(records):
    controller = ViewStateController(records=records)

    controller.set_tab("questions")
    assert controller.tab is Tab.QUESTIONS
    with pytest.raises(ValueError):
        controller.set_tab("settings")


def test_filtered_view_is_memoized_per_input(records):
    controller = ViewStateController(records=records)
    controller.update_filter("search_query", "designer")

    first = controller.filtered_records
    second = controller.filtered_records
    controller.set_records(records[:2])

    assert first == second == [records[2]]
    assert controller.filtered_records == []


def test_unsubscribe_stops_notifications(records):
    controller = ViewStateController(records=records)
    views: list[DashboardView] = []
    unsubscribe = controller.subscribe(views.append)

    controller.set_tab(Tab.CANDIDATES)
    unsubscribe()
    controller.set_tab(Tab.OVERVIEW)

    assert len(views) == 1


def test_edit_flags_track_draft(records):
    controller = ViewStateController(records=records)

    controller.begin_edit("job_description", "Old text")
    assert controller.edit_state("job_description").editing is True
    controller.update_draft("job_description", "New text")
    draft = controller.finish_edit("job_description")

    assert draft == "New text"
    assert controller.edit_state("job_description").editing is False

    controller.begin_edit("job_description", "Other")
    controller.cancel_edit("job_description")
    assert controller.edit_state("job_description").draft == ""


def test_top_applicants_are_matched_by_title(records):
    controller = ViewStateController(records=records, top_applicants=["Designer"])

    assert controller.is_top_applicant(records[2])
    assert not controller.is_top_applicant(records[0])


@pytest.mark.asyncio
async def test_load_applies_fetched_records(records):
    controller = ViewStateController()

    async def fetch():
        return records

    await controller.load(fetch)

    assert controller.records == tuple(records)
    assert controller.loading is False


@pytest.mark.asyncio
async def test_failed_load_keeps_prior_records_and_sets_banner(records):
    controller = ViewStateController(records=records)

    async def failing():
        raise FetchError("permission denied for table interview_videos")

    await controller.load(failing)

    assert controller.records == tuple(records)
    assert controller.error == "permission denied for table interview_videos"

    async def rejected():
        raise DataSourceError("JWT expired")

    await controller.load(rejected)
    assert controller.error == "JWT expired"


@pytest.mark.asyncio
async def test_overlapping_loads_resolve_last_write_wins(records):
    controller = ViewStateController()
    slow_gate = asyncio.Event()
    fast_gate = asyncio.Event()

    async def slow():
        await slow_gate.wait()
        return records[:1]

    async def fast():
        await fast_gate.wait()
        return records[1:]

    slow_task = asyncio.create_task(controller.load(slow))
    fast_task = asyncio.create_task(controller.load(fast))
    await asyncio.sleep(0)
    assert controller.loading is True

    # filters may change while requests are outstanding
    controller.update_filter("search_query", "engineer")

    fast_gate.set()
    await fast_task
    assert controller.records == tuple(records[1:])
    assert controller.loading is True

    slow_gate.set()
    await slow_task
    assert controller.records == tuple(records[:1])
    assert controller.loading is False
    assert [r.id for r in controller.filtered_records] == ["a-1"]
