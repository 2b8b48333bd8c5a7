from __future__ import annotations

from collections import Counter
from typing import Any

from ..rentals.store import get_all_rentals


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    related = [e for e in events if e["type"] == "related"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Top queries (already normalized by the search endpoint)
    query_counter: Counter[str] = Counter()
    for s in searches:
        if s.get("query"):
            query_counter[s["query"]] += 1
    top_queries = [{"name": n, "count": c} for n, c in query_counter.most_common(10)]

    # Top tags
    tag_counter: Counter[str] = Counter()
    for s in searches:
        for t in s.get("tags", []) or []:
            tag_counter[t] += 1
    top_tags = [{"name": n, "count": c} for n, c in tag_counter.most_common(10)]

    zero_results = sum(1 for s in searches if s.get("results_returned", 0) == 0)

    # Rentals by status
    status_counter: Counter[str] = Counter(r.status.value for r in get_all_rentals())

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "top_queries": top_queries,
        "top_tags": top_tags,
        "zero_result_rate": round(zero_results / total * 100, 1) if total else 0.0,
        "related_requests": len(related),
        "rentals_by_status": dict(status_counter),
    }
