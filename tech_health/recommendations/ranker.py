"""
Recommendation ranker: orders enriched recommendations and derives the
report-facing views of the ranked list.

Ordering (``rank``)
-------------------
    1. priority_score  descending
    2. roi             descending
    3. effort score    ascending  (Low 1 < Medium 3 < High 5; unrecognized → 3)

The sort is stable: recommendations that tie on all three keys keep their
input order, i.e. generator emission order (security → quality → DORA →
repository → architecture).

Derived views
-------------
identify_quick_wins : High-priority, Low-effort titles for the summary page.
group_by_horizon    : immediate / short-term / long-term roadmap buckets.

Planned improvements
--------------------
- Category diversity in quick wins (currently the first N matches win).
"""

from __future__ import annotations

from tech_health.models.recommendation import Recommendation
from tech_health.recommendations.scorer import level_score
from tech_health.taxonomy.recommendation_taxonomy import Level, Priority

# Shown when no recommendation qualifies as a quick win.
DEFAULT_QUICK_WINS: tuple[str, ...] = (
    "Update outdated dependencies",
    "Add comprehensive documentation",
    "Implement basic security scanning",
)

# Priority → roadmap bucket.
_HORIZON_BY_PRIORITY: dict[str, str] = {
    Priority.CRITICAL.value: "immediate",
    Priority.HIGH.value:     "immediate",
    Priority.MEDIUM.value:   "short_term",
    Priority.LOW.value:      "long_term",
}
HORIZONS: tuple[str, ...] = ("immediate", "short_term", "long_term")


def rank_key(rec: Recommendation) -> tuple[float, float, float]:
    """Sort key implementing the three-level comparator (ascending sort)."""
    return (-rec.priority_score, -rec.roi, level_score(rec.effort))


def rank(recommendations: list[Recommendation]) -> list[Recommendation]:
    """Return a new list ordered by priority score, then ROI, then effort.

    Args:
        recommendations: Enriched recommendations in emission order.

    Returns:
        New list; the input list is not reordered.
    """
    return sorted(recommendations, key=rank_key)


def identify_quick_wins(
    recommendations: list[Recommendation],
    limit: int = 3,
) -> list[str]:
    """Return up to ``limit`` quick-win titles (High priority, Low effort).

    Matches are taken in input order, so pass the ranked list. Priority and
    effort are compared case-insensitively.

    Returns:
        Titles of the qualifying recommendations, or ``DEFAULT_QUICK_WINS``
        when none qualify.
    """
    wins = [
        rec.title
        for rec in recommendations
        if rec.priority.lower() == Priority.HIGH.lower()
        and rec.effort.lower() == Level.LOW.lower()
    ][:limit]
    return wins or list(DEFAULT_QUICK_WINS)


def group_by_horizon(
    recommendations: list[Recommendation],
) -> dict[str, list[Recommendation]]:
    """Bucket recommendations into roadmap horizons by priority.

    immediate  : Critical, High   (0-30 days)
    short_term : Medium           (1-3 months)
    long_term  : Low              (3-6 months)

    All three keys are always present; each bucket keeps input order.
    """
    grouped: dict[str, list[Recommendation]] = {h: [] for h in HORIZONS}
    for rec in recommendations:
        grouped[_HORIZON_BY_PRIORITY[rec.priority]].append(rec)
    return grouped
