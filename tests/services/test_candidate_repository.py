from __future__ import annotations

import pytest

from doubles import InMemoryDataSource
from hirevision.errors import FetchError
from hirevision.services import CandidateRepository


def seeded_source() -> InMemoryDataSource:
    return InMemoryDataSource(
        {
            "interview_videos": [
                {
                    "id": "v-1",
                    "recruiter_id": "rec-1",
                    "title": "Backend Engineer",
                    "created_at": "2024-01-02T09:00:00Z",
                    "candidate_details": [
                        {"full_name": "Ada", "email": "ada@example.com", "experience": "3 years"}
                    ],
                },
                {
                    "id": "v-2",
                    "recruiter_id": "rec-1",
                    "title": "Data Engineer",
                    "created_at": "2024-01-05T09:00:00Z",
                    "candidate_details": None,
                },
                {"id": "v-3", "recruiter_id": "rec-2", "title": "Other recruiter"},
                {"id": None, "recruiter_id": "rec-1", "title": "Broken row"},
            ],
            "interview": [
                {"id": 7, "recruiter_id": "rec-1", "title": "Onsite", "created_at": "2024-02-01T00:00:00Z"},
                {"id": 8, "recruiter_id": "rec-1", "title": "Screen", "created_at": "2024-03-01T00:00:00Z"},
            ],
        }
    )


@pytest.mark.asyncio
async def test_fetch_returns_recruiter_records_newest_first():
    repository = CandidateRepository(seeded_source())

    records = await repository.fetch("rec-1")

    assert [record.id for record in records] == ["v-2", "v-1"]
    assert records[1].candidate_details is not None
    assert records[1].candidate_details.full_name == "Ada"
    assert records[0].candidate_details is None


@pytest.mark.asyncio
async def test_fetch_failure_raises_fetch_error(data_source):
    data_source.fail("select", "interview_videos", "JWT expired")
    repository = CandidateRepository(data_source)

    with pytest.raises(FetchError) as excinfo:
        await repository.fetch("rec-1")

    assert excinfo.value.user_message == "JWT expired"


@pytest.mark.asyncio
async def test_list_interviews_newest_first():
    repository = CandidateRepository(seeded_source())

    interviews = await repository.list_interviews("rec-1")

    assert [interview.id for interview in interviews] == ["8", "7"]
    assert interviews[0].title == "Screen"


@pytest.mark.asyncio
async def test_list_interviews_failure(data_source):
    data_source.fail("select", "interview", "boom")

    with pytest.raises(FetchError) as excinfo:
        await CandidateRepository(data_source).list_interviews("rec-1")

    assert excinfo.value.user_message == "Failed to load interviews."


@pytest.mark.asyncio
async def test_list_interviews_skips_invalid_rows():
    source = InMemoryDataSource(
        {
            "interview": [
                {"id": 1, "recruiter_id": "rec-1", "title": "Screen", "created_at": "2024-03-01T00:00:00Z"},
                {"id": None, "recruiter_id": "rec-1", "title": "Broken", "created_at": "2024-02-01T00:00:00Z"},
            ]
        }
    )

    interviews = await CandidateRepository(source).list_interviews("rec-1")

    assert [interview.id for interview in interviews] == ["1"]
