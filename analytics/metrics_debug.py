from __future__ import annotations

from collections import Counter
from dataclasses import asdict
from typing import Any, Dict

from analytics.models import AggregationResult

MAX_ISSUES = 50


def compute_debug(result: AggregationResult) -> Dict[str, Any]:
    skipped_by_kind = Counter(issue.kind for issue in result.skipped)
    return {
        "row_counts": {
            "data_rows": int(result.rows_read),
            "aggregated_rows": int(result.rows_aggregated),
            "skipped_rows": len(result.skipped),
        },
        "skipped_by_kind": dict(sorted(skipped_by_kind.items())),
        "issues": [asdict(issue) for issue in result.skipped[:MAX_ISSUES]],
        "months": result.months,
        "department_groups": len(result.department_stats),
    }
