"""UI-level state for the dashboard and its derived views."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, Sequence

import structlog

from ..errors import DataSourceError, FetchError
from ..schemas import CandidateRecord, FilterCriteria
from .filters import filter_records
from .metrics import DEFAULT_IN_PROGRESS_PERCENT, DerivedMetrics, compute_metrics


class Tab(str, Enum):
    OVERVIEW = "overview"
    CANDIDATES = "candidates"
    QUESTIONS = "questions"


@dataclass(slots=True)
class EditState:
    """Inline-edit toggle and the draft text being edited."""

    editing: bool = False
    draft: str = ""


@dataclass(slots=True, frozen=True)
class DashboardView:
    """Snapshot handed to renderers after every state change."""

    tab: Tab
    criteria: FilterCriteria
    records: list[CandidateRecord]
    metrics: DerivedMetrics
    loading: bool = False
    error: str | None = None
    edits: dict[str, EditState] = field(default_factory=dict)

    @property
    def total_results(self) -> int:
        return len(self.records)


Listener = Callable[[DashboardView], None]
Fetch = Callable[[], Awaitable[Sequence[CandidateRecord]]]


class ViewStateController:
    """Owns tab, criteria, edit flags and records for one dashboard view.

    Derived views are recomputed synchronously on every mutation and pushed
    to subscribers. Loads are never cancelled; the response that resolves
    last is the one that stays applied.
    """

    def __init__(
        self,
        *,
        records: Iterable[CandidateRecord] = (),
        tab: Tab = Tab.OVERVIEW,
        in_progress_percent: int = DEFAULT_IN_PROGRESS_PERCENT,
        timezone: str = "UTC",
        top_applicants: Iterable[str] = (),
    ) -> None:
        self._records: tuple[CandidateRecord, ...] = tuple(records)
        self._tab = Tab(tab)
        self._criteria = FilterCriteria()
        self._edits: dict[str, EditState] = {}
        self._in_progress_percent = in_progress_percent
        self._timezone = timezone
        self._top_applicants = frozenset(top_applicants)
        self._listeners: list[Listener] = []
        self._pending_loads = 0
        self._error: str | None = None
        self._filtered_cache: tuple[tuple[CandidateRecord, ...], FilterCriteria, list[CandidateRecord]] | None = None
        self._logger = structlog.get_logger(__name__)

    @property
    def tab(self) -> Tab:
        return self._tab

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def records(self) -> tuple[CandidateRecord, ...]:
        return self._records

    @property
    def loading(self) -> bool:
        return self._pending_loads > 0

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def filtered_records(self) -> list[CandidateRecord]:
        cached = self._filtered_cache
        if cached is not None and cached[0] is self._records and cached[1] == self._criteria:
            return list(cached[2])
        result = filter_records(self._records, self._criteria, tz=self._timezone)
        self._filtered_cache = (self._records, self._criteria, result)
        return list(result)

    @property
    def metrics(self) -> DerivedMetrics:
        return compute_metrics(self._records, in_progress_percent=self._in_progress_percent)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> DashboardView:
        return DashboardView(
            tab=self._tab,
            criteria=self._criteria,
            records=self.filtered_records,
            metrics=self.metrics,
            loading=self.loading,
            error=self._error,
            edits={name: EditState(state.editing, state.draft) for name, state in self._edits.items()},
        )

    def set_tab(self, tab: Tab | str) -> None:
        self._tab = Tab(tab)
        self._notify()

    def update_filter(self, name: str, value: Any) -> None:
        """Replace one criteria field and re-derive the view."""
        payload = self._criteria.model_dump()
        payload[name] = value
        self._criteria = FilterCriteria.model_validate(payload)
        self._notify()

    def set_criteria(self, criteria: FilterCriteria) -> None:
        self._criteria = criteria
        self._notify()

    def reset_filters(self) -> None:
        self._criteria = FilterCriteria()
        self._notify()

    def set_records(self, records: Iterable[CandidateRecord]) -> None:
        self._records = tuple(records)
        self._notify()

    def is_top_applicant(self, record: CandidateRecord) -> bool:
        return record.title in self._top_applicants

    def edit_state(self, name: str) -> EditState:
        return self._edits.setdefault(name, EditState())

    def begin_edit(self, name: str, current: str = "") -> None:
        self._edits[name] = EditState(editing=True, draft=current)
        self._notify()

    def update_draft(self, name: str, text: str) -> None:
        self.edit_state(name).draft = text
        self._notify()

    def cancel_edit(self, name: str) -> None:
        self._edits[name] = EditState()
        self._notify()

    def finish_edit(self, name: str) -> str:
        """Leave edit mode and return the draft to be saved."""
        state = self.edit_state(name)
        draft = state.draft
        self._edits[name] = EditState(editing=False, draft=draft)
        self._notify()
        return draft

    def clear_error(self) -> None:
        self._error = None
        self._notify()

    async def load(self, fetch: Fetch) -> None:
        """Await ``fetch`` and apply its records when it resolves.

        A failed fetch leaves the previous records in place and sets the
        error banner.
        """
        self._pending_loads += 1
        self._error = None
        self._notify()
        try:
            records = await fetch()
        except FetchError as exc:
            self._fail(exc.user_message)
        except DataSourceError as exc:
            self._fail(exc.message)
        else:
            self._records = tuple(records)
        finally:
            self._pending_loads -= 1
            self._notify()

    def _fail(self, message: str) -> None:
        self._error = message
        self._logger.warning("view_state.load_failed", error=message)

    def _notify(self) -> None:
        if not self._listeners:
            return
        view = self.snapshot()
        for listener in list(self._listeners):
            listener(view)
