"""Client-side candidate filtering.

Each predicate is pure and decides inclusion of a single record. They are
composed by :func:`build_predicate` in the order text, experience, rating,
date; a record is kept only when every active predicate accepts it.
"""

from __future__ import annotations

import re
import zlib
from datetime import date, datetime
from typing import Callable, Iterable, Sequence

import pendulum

from ..schemas import CandidateRecord, DateRange, FilterCriteria

Predicate = Callable[[CandidateRecord], bool]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_BASE36 = re.compile(r"^\s*([0-9a-zA-Z]+)")

# (label, lower, upper); ``None`` leaves that side open, lower bounds of
# open-ended buckets are exclusive.
EXPERIENCE_BUCKETS: tuple[tuple[str, int, int | None], ...] = (
    ("0-2", 0, 2),
    ("3-5", 3, 5),
    ("5+", 5, None),
)

RATING_STEPS = 20
RATING_FLOOR = 3.0


def matches_search_query(record: CandidateRecord, query: str) -> bool:
    """Case-insensitive substring match over title, name, email and experience."""
    if not query:
        return True
    needle = query.lower()
    if needle in record.title.lower():
        return True
    details = record.candidate_details
    if details is None:
        return False
    fields = (details.full_name, details.email, details.experience)
    return any(needle in value.lower() for value in fields if value)


def parse_experience_years(text: str | None) -> int | None:
    """Return the leading integer of a free-text experience string."""
    if not text:
        return None
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    return int(match.group(1))


def experience_bucket(years: int | None) -> str | None:
    """Map a number of years onto its bucket label."""
    if years is None:
        return None
    for label, lower, upper in EXPERIENCE_BUCKETS:
        if upper is None:
            if years > lower:
                return label
        elif lower <= years <= upper:
            return label
    return None


def matches_experience_level(record: CandidateRecord, levels: Iterable[str]) -> bool:
    levels = set(levels)
    if "all" in levels:
        return True
    details = record.candidate_details
    years = parse_experience_years(details.experience if details else None)
    bucket = experience_bucket(years)
    return bucket is not None and bucket in levels


def derive_rating(record_id: str) -> float:
    """Deterministic placeholder rating derived from a record identifier.

    No rating is stored for submissions; this mock score keeps the rating
    filter stable across reloads. Values lie in ``[3.0, 7.75]`` in steps of
    0.25.
    """
    match = _LEADING_BASE36.match(record_id)
    if match is not None:
        seed = int(match.group(1), 36)
    else:
        seed = zlib.crc32(record_id.encode("utf-8"))
    return (seed % RATING_STEPS) / 4 + RATING_FLOOR


def matches_rating_min(record: CandidateRecord, threshold: float) -> bool:
    if threshold <= 0:
        return True
    return derive_rating(record.id) >= threshold


def matches_date_range(
    record: CandidateRecord,
    date_range: DateRange,
    *,
    tz: str = "UTC",
) -> bool:
    """Check a record's submission time against the calendar bounds.

    The end bound is extended by one day so the whole end date is included.
    """
    timestamp = record.timestamp
    if timestamp is None or date_range.is_open:
        return True
    moment = _as_aware(timestamp, tz)
    if date_range.start is not None and moment < _start_of(date_range.start, tz):
        return False
    if date_range.end is not None:
        end_plus_one_day = _start_of(date_range.end, tz).add(days=1)
        if moment > end_plus_one_day:
            return False
    return True


def build_predicate(criteria: FilterCriteria, *, tz: str = "UTC") -> Predicate:
    """Compose the active predicates for ``criteria`` into one check."""
    checks: list[Predicate] = []
    if criteria.search_query:
        checks.append(lambda record: matches_search_query(record, criteria.search_query))
    if not criteria.all_experience_levels:
        checks.append(
            lambda record: matches_experience_level(record, criteria.experience_levels)
        )
    if criteria.rating_min > 0:
        checks.append(lambda record: matches_rating_min(record, criteria.rating_min))
    if not criteria.date_range.is_open:
        checks.append(lambda record: matches_date_range(record, criteria.date_range, tz=tz))

    def predicate(record: CandidateRecord) -> bool:
        return all(check(record) for check in checks)

    return predicate


def filter_records(
    records: Sequence[CandidateRecord],
    criteria: FilterCriteria,
    *,
    tz: str = "UTC",
) -> list[CandidateRecord]:
    """Return the records accepted by ``criteria``, preserving input order."""
    predicate = build_predicate(criteria, tz=tz)
    return [record for record in records if predicate(record)]


def _as_aware(value: datetime, tz: str) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=pendulum.timezone(tz))
    return value


def _start_of(day: date, tz: str) -> pendulum.DateTime:
    return pendulum.datetime(day.year, day.month, day.day, tz=tz)
