"""Interview question list for a recruiter."""

from __future__ import annotations

import secrets

import structlog
from pydantic import ValidationError

from ..adapters import DataSource, Query
from ..errors import DashboardError, DataSourceError, FetchError, MutationError
from ..schemas import InterviewOwner, InterviewQuestion
from ..schemas.config import TableNames

INVITE_CODE_LIMIT = 1_000_000_000


def _random_invite_code() -> int:
    return secrets.randbelow(INVITE_CODE_LIMIT)


class QuestionListManager:
    """Lists, adds and removes the questions of one recruiter's interviews.

    Local state changes only after the store confirms a mutation. A failed
    call leaves ``questions`` untouched and records ``last_error``.
    """

    def __init__(
        self,
        data_source: DataSource,
        recruiter_id: str,
        *,
        tables: TableNames | None = None,
        invite_code_factory=_random_invite_code,
    ) -> None:
        self._data_source = data_source
        self._recruiter_id = recruiter_id
        self._tables = tables or TableNames()
        self._invite_code_factory = invite_code_factory
        self._interview_id: str | None = None
        self._logger = structlog.get_logger(__name__).bind(recruiter_id=recruiter_id)
        self.questions: list[InterviewQuestion] = []
        self.loading = False
        self.last_error: DashboardError | None = None

    @property
    def error(self) -> str | None:
        return self.last_error.user_message if self.last_error else None

    @property
    def interview_id(self) -> str | None:
        return self._interview_id

    async def list(self) -> list[InterviewQuestion]:
        """Reload questions owned by the recruiter, ordered by ``order_index``."""
        self.loading = True
        self.last_error = None
        try:
            rows = await self._data_source.select(
                self._tables.questions,
                Query(
                    columns="*, interview:interview_id(recruiter_id)",
                    order_by="order_index",
                ),
            )
        except DataSourceError as exc:
            self._record(FetchError(exc.message), "questions.list_failed")
            return list(self.questions)
        finally:
            self.loading = False

        questions: list[InterviewQuestion] = []
        skipped = 0
        for row in rows:
            try:
                questions.append(InterviewQuestion.model_validate(row))
            except ValidationError as exc:
                skipped += 1
                self._logger.warning("questions.invalid_row", row_id=row.get("id"), error=str(exc))
        self.questions = [q for q in questions if q.belongs_to(self._recruiter_id)]
        self._logger.info("questions.listed", count=len(self.questions), skipped=skipped)
        return list(self.questions)

    async def add(self, text: str) -> InterviewQuestion | None:
        """Attach a new question to the recruiter's interview.

        The interview is created on first use when the recruiter has none.
        Returns ``None`` for blank text, while another request is in flight,
        or when the store rejects the insert.
        """
        if not text.strip() or self.loading:
            return None
        self.loading = True
        self.last_error = None
        try:
            interview_id = await self._resolve_interview()
            order_index = await self._next_order_index(interview_id)
            row = await self._data_source.insert(
                self._tables.questions,
                {
                    "interview_id": interview_id,
                    "question": text,
                    "order_index": order_index,
                },
            )
        except DataSourceError as exc:
            self._record(MutationError(exc.message), "questions.add_failed")
            return None
        finally:
            self.loading = False

        question = InterviewQuestion.model_validate(row)
        if question.interview is None:
            question = question.model_copy(
                update={"interview": InterviewOwner(recruiter_id=self._recruiter_id)}
            )
        self.questions = [*self.questions, question]
        self._logger.info("questions.added", question_id=question.id, interview_id=interview_id)
        return question

    async def remove(self, question_id: str) -> bool:
        """Delete one question; returns ``True`` once the store confirms."""
        if self.loading:
            return False
        self.loading = True
        self.last_error = None
        try:
            await self._data_source.delete(self._tables.questions, question_id)
        except DataSourceError as exc:
            self._record(MutationError(exc.message), "questions.remove_failed")
            return False
        finally:
            self.loading = False

        self.questions = [q for q in self.questions if q.id != question_id]
        self._logger.info("questions.removed", question_id=question_id)
        return True

    async def _resolve_interview(self) -> str:
        if self._interview_id is not None:
            return self._interview_id
        rows = await self._data_source.select(
            self._tables.interviews,
            Query(
                columns="id",
                eq={"recruiter_id": self._recruiter_id},
                order_by="created_at",
                ascending=False,
                limit=1,
            ),
        )
        if rows:
            interview_id = rows[0]["id"]
        else:
            created = await self._data_source.insert(
                self._tables.interviews,
                {
                    "recruiter_id": self._recruiter_id,
                    "invite_code": self._invite_code_factory(),
                },
            )
            interview_id = created["id"]
            self._logger.info("interviews.created", interview_id=interview_id)
        self._interview_id = str(interview_id)
        return self._interview_id

    async def _next_order_index(self, interview_id: str) -> int:
        # the store may hold questions this manager never listed
        rows = await self._data_source.select(
            self._tables.questions,
            Query(columns="order_index", eq={"interview_id": interview_id}),
        )
        indices = [row["order_index"] for row in rows if row.get("order_index") is not None]
        indices.extend(
            q.order_index
            for q in self.questions
            if q.interview_id == interview_id and q.order_index is not None
        )
        return max(indices, default=-1) + 1

    def _record(self, error: DashboardError, event: str) -> None:
        self.last_error = error
        self._logger.warning(event, error=error.user_message)
