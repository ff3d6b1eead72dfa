"""Aggregation of run outcomes by year-month bucket."""

from __future__ import annotations

from collections.abc import Iterable

from core.models import OutcomeRow
from core.services.interfaces import BucketSummary, RunSummary


class SummaryService:
    """Groups outcomes into per-bucket counts."""

    def summarize(self, outcomes: Iterable[OutcomeRow]) -> RunSummary:
        """Return a `RunSummary` with buckets ordered by `YYYY-MM`."""
        buckets: dict[str, BucketSummary] = {}
        for outcome in outcomes:
            bucket = buckets.get(outcome.year_month)
            if bucket is None:
                bucket = buckets[outcome.year_month] = BucketSummary(year_month=outcome.year_month)
            bucket.counts[outcome.status] = bucket.counts.get(outcome.status, 0) + 1
            bucket.total_bytes += outcome.plan.size_bytes or 0
        return RunSummary(buckets=[buckets[k] for k in sorted(buckets)])
