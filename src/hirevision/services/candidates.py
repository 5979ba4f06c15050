"""Candidate submissions and recruiter interviews."""

from __future__ import annotations

import structlog
from pydantic import ValidationError

from ..adapters import DataSource, Query
from ..errors import DataSourceError, FetchError
from ..schemas import CandidateRecord, Interview
from ..schemas.config import TableNames

CANDIDATE_COLUMNS = (
    "id, title, created_at, "
    "candidate_details(full_name, email, experience, created_at)"
)


class CandidateRepository:
    """Read-only access to a recruiter's candidate submissions."""

    def __init__(self, data_source: DataSource, *, tables: TableNames | None = None) -> None:
        self._data_source = data_source
        self._tables = tables or TableNames()
        self._logger = structlog.get_logger(__name__)

    async def fetch(self, recruiter_id: str) -> list[CandidateRecord]:
        try:
            rows = await self._data_source.select(
                self._tables.candidates,
                Query(
                    columns=CANDIDATE_COLUMNS,
                    eq={"recruiter_id": recruiter_id},
                    order_by="created_at",
                    ascending=False,
                ),
            )
        except DataSourceError as exc:
            self._logger.warning("candidates.fetch_failed", recruiter_id=recruiter_id, error=exc.message)
            raise FetchError(exc.message) from exc

        records: list[CandidateRecord] = []
        skipped = 0
        for row in rows:
            try:
                records.append(CandidateRecord.model_validate(_flatten_details(row)))
            except ValidationError as exc:
                skipped += 1
                self._logger.warning("candidates.invalid_row", row_id=row.get("id"), error=str(exc))
        self._logger.info("candidates.fetched", recruiter_id=recruiter_id, count=len(records), skipped=skipped)
        return records

    async def list_interviews(self, recruiter_id: str) -> list[Interview]:
        """Return the recruiter's interviews, newest first."""
        try:
            rows = await self._data_source.select(
                self._tables.interviews,
                Query(
                    columns="id, title, description, created_at",
                    eq={"recruiter_id": recruiter_id},
                    order_by="created_at",
                    ascending=False,
                ),
            )
        except DataSourceError as exc:
            self._logger.warning("interviews.fetch_failed", recruiter_id=recruiter_id, error=exc.message)
            raise FetchError("Failed to load interviews.") from exc

        interviews: list[Interview] = []
        for row in rows:
            try:
                interviews.append(Interview.model_validate(row))
            except ValidationError as exc:
                self._logger.warning("interviews.invalid_row", row_id=row.get("id"), error=str(exc))
        return interviews


def _flatten_details(row: dict) -> dict:
    # one-to-many embeds come back as lists
    details = row.get("candidate_details")
    if isinstance(details, list):
        row = {**row, "candidate_details": details[0] if details else None}
    return row
