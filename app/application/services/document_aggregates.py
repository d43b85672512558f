"""Search, filter and aggregate over a snapshot of the document list.

Pure functions, no I/O. Every view recomputes these from the snapshot it just
loaded; nothing is cached or updated incrementally.
"""

from __future__ import annotations

import calendar
from collections.abc import Sequence
from datetime import datetime, time

from app.application.dtos.document import DashboardStats, SourceCount
from app.domain.entities.document import Document

ALL_SOURCES = "all"
TOP_SOURCES_LIMIT = 5
RECENT_LIMIT = 5


def search_documents(docs: Sequence[Document], term: str) -> list[Document]:
    """Keep documents whose complainant name, subject or source contains term.

    Case-insensitive substring match. An empty term keeps everything.
    """
    needle = (term or "").lower()
    if not needle:
        return list(docs)
    return [
        d
        for d in docs
        if needle in d.complainant_name.lower()
        or needle in d.subject.lower()
        or needle in d.source.lower()
    ]


def filter_by_source(docs: Sequence[Document], source: str) -> list[Document]:
    """Exact match on source; the "all" sentinel (or empty) disables the filter."""
    if not source or source == ALL_SOURCES:
        return list(docs)
    return [d for d in docs if d.source == source]


def filter_documents(docs: Sequence[Document], term: str, source: str) -> list[Document]:
    """Search and source filter combined with AND."""
    return filter_by_source(search_documents(docs, term), source)


def source_catalogue(docs: Sequence[Document]) -> list[str]:
    """Return ["all", *distinct sources] in first-seen order."""
    seen: dict[str, None] = {}
    for d in docs:
        seen.setdefault(d.source, None)
    return [ALL_SOURCES, *seen]


def count_by_source(docs: Sequence[Document]) -> list[SourceCount]:
    """Per-source counts in first-seen order. Counts sum to len(docs)."""
    counts: dict[str, int] = {}
    for d in docs:
        counts[d.source] = counts.get(d.source, 0) + 1
    return [SourceCount(source=s, count=c) for s, c in counts.items()]


def rank_sources(
    docs: Sequence[Document], limit: int = TOP_SOURCES_LIMIT
) -> list[SourceCount]:
    """Sources by descending count, ties in first-seen order, truncated to limit.

    Each entry carries its share of the whole snapshot (0.0 to 1.0).
    """
    total = len(docs)
    # sorted() is stable, so equal counts keep first-seen order.
    ranked = sorted(count_by_source(docs), key=lambda sc: sc.count, reverse=True)
    return [
        SourceCount(source=sc.source, count=sc.count, share=sc.count / total if total else 0.0)
        for sc in ranked[:limit]
    ]


def month_bounds(now: datetime) -> tuple[datetime, datetime]:
    """First and last instant of now's calendar month, in now's timezone."""
    last_day = calendar.monthrange(now.year, now.month)[1]
    start = datetime.combine(now.date().replace(day=1), time.min, tzinfo=now.tzinfo)
    end = datetime.combine(now.date().replace(day=last_day), time.max, tzinfo=now.tzinfo)
    return start, end


def count_in_month(docs: Sequence[Document], now: datetime) -> int:
    """Number of documents received within now's calendar month (bounds inclusive)."""
    start, end = month_bounds(now)
    return sum(1 for d in docs if start <= d.received_date <= end)


def build_dashboard_stats(docs: Sequence[Document], now: datetime) -> DashboardStats:
    """Aggregate one snapshot for the dashboard.

    docs is expected newest-first (as the repository returns it), so recent is
    simply its head.
    """
    return DashboardStats(
        total=len(docs),
        this_month=count_in_month(docs, now),
        with_files=sum(1 for d in docs if d.has_file),
        source_count=len(source_catalogue(docs)) - 1,
        top_sources=rank_sources(docs),
        recent=list(docs[:RECENT_LIMIT]),
    )
