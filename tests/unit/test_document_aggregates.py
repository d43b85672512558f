"""Unit tests for search, source filter and dashboard aggregates (pure functions)."""

from datetime import UTC, datetime, timedelta, timezone

from app.application.services.document_aggregates import (
    ALL_SOURCES,
    build_dashboard_stats,
    count_by_source,
    count_in_month,
    filter_by_source,
    filter_documents,
    month_bounds,
    rank_sources,
    search_documents,
    source_catalogue,
)
from app.domain.value_objects.core import StoredFile
from tests.fakes import make_document


def _docs():
    return [
        make_document("a", complainant_name="Anan", subject="Leave request", source="HR"),
        make_document("b", complainant_name="Busaba", subject="Budget overrun", source="Finance"),
        make_document("c", complainant_name="Chai", subject="Harassment report", source="HR"),
        make_document("d", complainant_name="Dao", subject="IT misuse", source="IT"),
    ]


class TestSearchDocuments:
    def test_empty_term_returns_everything(self) -> None:
        docs = _docs()
        assert search_documents(docs, "") == docs

    def test_matches_complainant_subject_or_source_case_insensitively(self) -> None:
        docs = _docs()
        assert [d.id for d in search_documents(docs, "anan")] == ["a"]
        assert [d.id for d in search_documents(docs, "BUDGET")] == ["b"]
        assert [d.id for d in search_documents(docs, "hr")] == ["a", "c"]

    def test_no_match_returns_empty(self) -> None:
        assert search_documents(_docs(), "zzz") == []

    def test_result_is_subset_in_original_order(self) -> None:
        docs = _docs()
        result = search_documents(docs, "a")
        assert [d.id for d in result] == [d.id for d in docs if d in result]


class TestFilterBySource:
    def test_all_sentinel_keeps_everything(self) -> None:
        docs = _docs()
        assert filter_by_source(docs, ALL_SOURCES) == docs

    def test_exact_match_only(self) -> None:
        assert [d.id for d in filter_by_source(_docs(), "HR")] == ["a", "c"]
        assert filter_by_source(_docs(), "hr") == []

    def test_combined_with_search(self) -> None:
        assert [d.id for d in filter_documents(_docs(), "report", "HR")] == ["c"]
        assert filter_documents(_docs(), "report", "IT") == []


class TestSourceCatalogue:
    def test_all_first_then_distinct_in_first_seen_order(self) -> None:
        assert source_catalogue(_docs()) == [ALL_SOURCES, "HR", "Finance", "IT"]

    def test_empty_snapshot(self) -> None:
        assert source_catalogue([]) == [ALL_SOURCES]


class TestCountAndRank:
    def test_counts_sum_to_total(self) -> None:
        counts = count_by_source(_docs())
        assert sum(c.count for c in counts) == 4
        assert [(c.source, c.count) for c in counts] == [("HR", 2), ("Finance", 1), ("IT", 1)]

    def test_rank_orders_by_count_with_stable_ties(self) -> None:
        ranked = rank_sources(_docs())
        assert [r.source for r in ranked] == ["HR", "Finance", "IT"]
        assert ranked[0].share == 0.5

    def test_rank_truncates_to_five(self) -> None:
        docs = [make_document(f"d{i}", source=f"S{i}") for i in range(7)]
        ranked = rank_sources(docs)
        assert len(ranked) == 5
        assert [r.source for r in ranked] == ["S0", "S1", "S2", "S3", "S4"]

    def test_rank_empty(self) -> None:
        assert rank_sources([]) == []


class TestMonthWindow:
    def test_month_bounds_cover_the_calendar_month(self) -> None:
        start, end = month_bounds(datetime(2024, 2, 15, 12, 0, tzinfo=UTC))
        assert start == datetime(2024, 2, 1, tzinfo=UTC)
        assert end.date().day == 29
        assert end.hour == 23 and end.minute == 59

    def test_count_in_month_includes_boundaries(self) -> None:
        now = datetime(2024, 3, 15, tzinfo=UTC)
        docs = [
            make_document("first", received_date=datetime(2024, 3, 1, 0, 0, tzinfo=UTC)),
            make_document("last", received_date=datetime(2024, 3, 31, 23, 59, 59, tzinfo=UTC)),
            make_document("before", received_date=datetime(2024, 2, 29, 23, 59, tzinfo=UTC)),
            make_document("after", received_date=datetime(2024, 4, 1, 0, 0, tzinfo=UTC)),
        ]
        assert count_in_month(docs, now) == 2

    def test_month_uses_the_timezone_of_now(self) -> None:
        bangkok = timezone(timedelta(hours=7))
        # 2024-03-31 20:00 UTC is already April 1st in Bangkok.
        doc = make_document("x", received_date=datetime(2024, 3, 31, 20, 0, tzinfo=UTC))
        assert count_in_month([doc], datetime(2024, 4, 10, tzinfo=bangkok)) == 1
        assert count_in_month([doc], datetime(2024, 4, 10, tzinfo=UTC)) == 0


class TestDashboardStats:
    def test_aggregates_one_snapshot(self) -> None:
        stored = StoredFile("a.pdf", "https://files.test/a", "documents/a/1.pdf")
        docs = [
            make_document("a", file=stored, source="HR", received_date=datetime(2024, 3, 5, tzinfo=UTC)),
            make_document("b", source="HR", received_date=datetime(2024, 3, 2, tzinfo=UTC)),
            make_document("c", source="IT", received_date=datetime(2024, 1, 2, tzinfo=UTC)),
        ]
        stats = build_dashboard_stats(docs, datetime(2024, 3, 20, tzinfo=UTC))
        assert stats.total == 3
        assert stats.this_month == 2
        assert stats.with_files == 1
        assert stats.source_count == 2
        assert [s.source for s in stats.top_sources] == ["HR", "IT"]
        assert [d.id for d in stats.recent] == ["a", "b", "c"]

    def test_recent_is_capped_at_five(self) -> None:
        docs = [make_document(f"d{i}") for i in range(8)]
        stats = build_dashboard_stats(docs, datetime(2024, 3, 20, tzinfo=UTC))
        assert len(stats.recent) == 5

    def test_empty_snapshot(self) -> None:
        stats = build_dashboard_stats([], datetime(2024, 3, 20, tzinfo=UTC))
        assert (stats.total, stats.this_month, stats.with_files, stats.source_count) == (0, 0, 0, 0)
        assert stats.top_sources == []
