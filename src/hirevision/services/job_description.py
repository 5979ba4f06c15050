"""Recruiter job description, editable inline from the overview."""

from __future__ import annotations

import structlog

from ..adapters import DataSource, Query
from ..errors import DashboardError, DataSourceError, FetchError, MutationError
from ..schemas.config import TableNames


class JobDescriptionManager:
    """Loads and saves the ``job_description`` field of a recruiter row."""

    field = "job_description"

    def __init__(
        self,
        data_source: DataSource,
        recruiter_id: str,
        *,
        tables: TableNames | None = None,
    ) -> None:
        self._data_source = data_source
        self._recruiter_id = recruiter_id
        self._tables = tables or TableNames()
        self._logger = structlog.get_logger(__name__).bind(recruiter_id=recruiter_id)
        self.job_description = ""
        self.is_loading = False
        self.is_saving = False
        self.last_error: DashboardError | None = None

    @property
    def error(self) -> str | None:
        return self.last_error.user_message if self.last_error else None

    async def load(self) -> str:
        self.is_loading = True
        self.last_error = None
        try:
            rows = await self._data_source.select(
                self._tables.recruiters,
                Query(columns=self.field, eq={"id": self._recruiter_id}, limit=1),
            )
        except DataSourceError as exc:
            self.last_error = FetchError(exc.message)
            self._logger.warning("job_description.load_failed", error=exc.message)
            return self.job_description
        finally:
            self.is_loading = False
        self.job_description = (rows[0].get(self.field) or "") if rows else ""
        return self.job_description

    async def save(self, text: str) -> bool:
        """Persist ``text``; local state changes only when the store accepts it."""
        if self.is_saving:
            return False
        self.is_saving = True
        self.last_error = None
        try:
            updated = await self._data_source.update(
                self._tables.recruiters,
                self._recruiter_id,
                {self.field: text},
            )
            if updated is None:
                await self._data_source.insert(
                    self._tables.recruiters,
                    {"id": self._recruiter_id, self.field: text},
                )
        except DataSourceError as exc:
            self.last_error = MutationError(exc.message)
            self._logger.warning("job_description.save_failed", error=exc.message)
            return False
        finally:
            self.is_saving = False
        self.job_description = text
        self._logger.info("job_description.saved", length=len(text))
        return True
