"""Plain-text rendering of dashboard views."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from .core import DerivedMetrics, derive_rating
from .schemas import CandidateRecord, Interview, InterviewQuestion, User

BAR_WIDTH = 20


def render_overview(
    user: User,
    metrics: DerivedMetrics,
    job_description: str,
) -> str:
    lines = [f"Welcome back, {user.first_name}", ""]
    lines.append(f"  Total Applicants  {metrics.total_applicants}")
    lines.append(f"  In Progress       {metrics.applicants_in_progress} (estimated)")
    if metrics.average_rating is not None:
        lines.append(f"  Avg Rating        {metrics.average_rating:.2f} (derived)")
    lines.append("")
    lines.append("Experience Distribution")
    lines.extend(_bar_chart(metrics.experience_distribution))
    lines.append("")
    lines.append("Job Description")
    lines.append(
        f"  {job_description}"
        if job_description
        else "  No job description set. Run `hirevision job edit` to add one."
    )
    return "\n".join(lines)


def render_candidates(
    records: Sequence[CandidateRecord],
    *,
    total: int,
    is_top_applicant: Callable[[CandidateRecord], bool] = lambda record: False,
) -> str:
    header = f"Showing {len(records)} of {total} candidates"
    if not records:
        return "\n".join([header, "", "No candidates match your filters."])
    cards = [render_candidate_card(record, top=is_top_applicant(record)) for record in records]
    return "\n\n".join([header, *cards])


def render_candidate_card(record: CandidateRecord, *, top: bool = False) -> str:
    title = f"{record.title or record.id}{'  [top applicant]' if top else ''}"
    lines = [title]
    details = record.candidate_details
    if details is not None:
        if details.full_name:
            lines.append(f"  Name:       {details.full_name}")
        if details.email:
            lines.append(f"  Email:      {details.email}")
        if details.experience:
            lines.append(f"  Experience: {details.experience}")
    if record.timestamp is not None:
        lines.append(f"  Submitted:  {record.timestamp:%Y-%m-%d}")
    lines.append(f"  Rating:     {derive_rating(record.id):.2f}")
    return "\n".join(lines)


def render_questions(questions: Sequence[InterviewQuestion]) -> str:
    count = len(questions)
    header = f"Questions ({count} {'question' if count == 1 else 'questions'})"
    if not questions:
        return "\n".join([header, "", "No questions yet. Add your first interview question."])
    rows = [f"  {idx}. {q.question}  [{q.id}]" for idx, q in enumerate(questions, start=1)]
    return "\n".join([header, *rows])


def render_interviews(interviews: Sequence[Interview]) -> str:
    if not interviews:
        return "No interviews yet."
    lines = []
    for interview in interviews:
        created = f"{interview.created_at:%Y-%m-%d}" if interview.created_at else "-"
        lines.append(f"{created}  {interview.title or 'Untitled interview'}  [{interview.id}]")
        if interview.description:
            lines.append(f"    {interview.description}")
    return "\n".join(lines)


def _bar_chart(counts: dict[str, int]) -> Iterable[str]:
    peak = max(counts.values(), default=0)
    for label, value in counts.items():
        width = round(BAR_WIDTH * value / peak) if peak else 0
        yield f"  {label:<8} {'#' * width} {value}"
